"""Directory listing for a single collection."""

from __future__ import annotations

import os
from pathlib import Path

from ..config import DEFAULT_MIME, IMAGE_EXTENSIONS, MIME_TYPES, VECTOR_EXTENSIONS
from ..errors import InvalidInputError
from ..utils.pathutils import extension_of


def list_images(directory: str | os.PathLike[str]) -> list[str]:
    """Return the sorted absolute paths of the images directly inside *directory*.

    Only regular files whose extension is in :data:`IMAGE_EXTENSIONS` are
    returned; sub-directories are not descended into.  The strings returned
    here are the ones the thumbnail cache keys on, so every caller should
    address images through this function's output.
    """

    root = Path(directory)
    if not root.is_dir():
        raise InvalidInputError(f"Not a directory: {directory}")

    images: list[str] = []
    with os.scandir(root) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if extension_of(entry.name) in IMAGE_EXTENSIONS:
                images.append(os.path.abspath(entry.path))
    images.sort()
    return images


def mime_for_path(path: str | os.PathLike[str]) -> str:
    """Return the MIME type implied by the extension of *path*."""

    return MIME_TYPES.get(extension_of(path), DEFAULT_MIME)


def is_vector(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` for resolution-independent formats served without thumbnails."""

    return extension_of(path) in VECTOR_EXTENSIONS


__all__ = ["is_vector", "list_images", "mime_for_path"]
