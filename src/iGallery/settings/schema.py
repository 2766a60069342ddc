"""Schema helpers for the application settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import THUMB_QUALITY, THUMB_SIZES, THUMB_WORKERS

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "iGallery/settings.schema.json",
    "type": "object",
    "required": ["schema", "thumbnails"],
    "properties": {
        "schema": {"const": "iGallery/settings@1"},
        "cache_dir": {"type": ["string", "null"]},
        "thumbnails": {
            "type": "object",
            "required": ["sizes", "quality", "workers", "witness"],
            "properties": {
                "sizes": {
                    "type": "array",
                    "items": {"type": "integer", "minimum": 1, "maximum": 16384},
                    "minItems": 1,
                    "uniqueItems": True,
                },
                "quality": {"type": "integer", "minimum": 1, "maximum": 95},
                "workers": {"type": "integer", "minimum": 1, "maximum": 32},
                "witness": {"type": "string", "enum": ["mtime", "content"]},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "iGallery/settings@1",
    "cache_dir": None,
    "thumbnails": {
        "sizes": list(THUMB_SIZES),
        "quality": THUMB_QUALITY,
        "workers": THUMB_WORKERS,
        "witness": "mtime",
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "thumbnails" and isinstance(value, dict):
                merged["thumbnails"].update(value)
                continue
            if key == "cache_dir" and value is not None and value != "":
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged

