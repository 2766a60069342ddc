"""Utilities for working with filesystem paths inside iGallery."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if needed and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def extension_of(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased suffix of *path* including the dot, or ``""``."""

    return Path(path).suffix.lower()


def unique_destination(target_dir: Path, file_name: str) -> Path:
    """Return ``target_dir / file_name`` or the first free ``<stem>_<n><ext>``."""

    candidate = target_dir / file_name
    if not candidate.exists():
        return candidate
    name = Path(file_name)
    stem = name.stem or "file"
    suffix = name.suffix
    counter = 1
    while True:
        candidate = target_dir / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write *data* to *path* through a sibling temp file and ``os.replace``.

    Readers either see the previous file, no file, or the complete new file.
    """

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
