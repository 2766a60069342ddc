"""Disk-backed thumbnail store addressed purely by cache key."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ..config import THUMB_SUFFIX
from ..errors import InvalidInputError, StorageError
from ..utils.pathutils import atomic_write_bytes, ensure_dir
from .keys import is_cache_key

LOGGER = logging.getLogger(__name__)


class ThumbnailStore:
    """Flat directory of ``<key><suffix>`` files.

    The store knows nothing about which source produced a key; finding the
    entry for a source always means recomputing its key.  The directory is
    created on first write rather than on construction.
    """

    def __init__(self, cache_dir: Path, suffix: str = THUMB_SUFFIX):
        self._cache_dir = Path(cache_dir).expanduser().absolute()
        self._suffix = suffix

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def suffix(self) -> str:
        return self._suffix

    def path_for(self, key: str) -> Path:
        if not is_cache_key(key):
            raise InvalidInputError(f"Malformed cache key: {key!r}")
        return self._cache_dir / f"{key}{self._suffix}"

    def contains(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Cannot read cache entry {path}: {exc}") from exc

    def write(self, key: str, data: bytes) -> Path:
        path = self.path_for(key)
        try:
            ensure_dir(self._cache_dir)
            atomic_write_bytes(path, data)
        except OSError as exc:
            raise StorageError(f"Cannot write cache entry {path}: {exc}") from exc
        LOGGER.debug("Stored %d bytes at %s", len(data), path)
        return path

    def remove(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Cannot remove cache entry {path}: {exc}") from exc
        return True

    def iter_keys(self) -> Iterator[str]:
        """Yield the key of every well-formed entry currently on disk."""

        if not self._cache_dir.is_dir():
            return
        for entry in self._cache_dir.iterdir():
            if entry.suffix != self._suffix or not entry.is_file():
                continue
            if is_cache_key(entry.stem):
                yield entry.stem
