"""JSON helpers with atomic writes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .pathutils import atomic_write_bytes


def read_json(path: Path) -> Any:
    """Return the decoded JSON document stored at *path*."""

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def write_json(path: Path, payload: Any) -> None:
    """Serialise *payload* to *path* without leaving a half-written file."""

    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)
    atomic_write_bytes(path, (text + "\n").encode("utf-8"))
