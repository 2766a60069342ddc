"""Cache key derivation for thumbnail entries.

A key is the SHA-256 of the source path, a change *witness* and the
requested bounding size::

    sha256( utf8(path) || u128_le(witness) || u32_le(max_dimension) )

The byte layout is shared with caches written by earlier releases, so it
must not change.  By default the witness is the file's modification time in
milliseconds; :class:`ContentHashWitness` swaps in an XXH3-128 digest of the
file contents for callers that cannot trust timestamps.
"""

from __future__ import annotations

import hashlib
import os
import stat
from pathlib import Path
from typing import Protocol

from ..errors import ClockError, InvalidInputError, MetadataError
from ..utils.hashutils import file_xxh3_int

_U128_MAX = (1 << 128) - 1
_U32_MAX = (1 << 32) - 1

KEY_LENGTH = 64


def derive_cache_key(source_path: str, modified_millis: int, max_dimension: int) -> str:
    """Return the 64-character hex cache key for one (source, state, size) triple.

    *source_path* is hashed exactly as given; callers must address a file
    with the same string everywhere or keys silently diverge.
    """

    if not 0 <= modified_millis <= _U128_MAX:
        raise InvalidInputError(f"Witness out of range for a cache key: {modified_millis}")
    if not 0 <= max_dimension <= _U32_MAX:
        raise InvalidInputError(f"Size out of range for a cache key: {max_dimension}")
    digest = hashlib.sha256()
    digest.update(source_path.encode("utf-8"))
    digest.update(modified_millis.to_bytes(16, "little"))
    digest.update(max_dimension.to_bytes(4, "little"))
    return digest.hexdigest()


def is_cache_key(value: str) -> bool:
    """Return ``True`` when *value* looks like a key produced by :func:`derive_cache_key`."""

    if len(value) != KEY_LENGTH:
        return False
    return all(ch in "0123456789abcdef" for ch in value)


def _stat_regular_file(path: str) -> os.stat_result:
    try:
        info = os.stat(path)
    except OSError as exc:
        raise MetadataError(f"Cannot read metadata for {path}: {exc}") from exc
    if not stat.S_ISREG(info.st_mode):
        raise MetadataError(f"Not a regular file: {path}")
    return info


def modified_millis(source_path: str) -> int:
    """Return the modification time of *source_path* in whole milliseconds."""

    info = _stat_regular_file(source_path)
    mtime_ns = info.st_mtime_ns
    if mtime_ns < 0:
        raise ClockError(f"Modification time of {source_path} is before the epoch")
    return mtime_ns // 1_000_000


class Witness(Protocol):
    """Strategy returning the integer that stands in for a file's content."""

    name: str

    def witness(self, source_path: str) -> int: ...


class ModifiedTimeWitness:
    """Use the modification time; cheap, but blind to touch-free edits."""

    name = "mtime"

    def witness(self, source_path: str) -> int:
        return modified_millis(source_path)


class ContentHashWitness:
    """Use an XXH3-128 digest of the file, read in full on every lookup."""

    name = "content"

    def witness(self, source_path: str) -> int:
        _stat_regular_file(source_path)
        try:
            return file_xxh3_int(Path(source_path))
        except OSError as exc:
            raise MetadataError(f"Cannot hash {source_path}: {exc}") from exc


_WITNESSES: dict[str, type] = {
    ModifiedTimeWitness.name: ModifiedTimeWitness,
    ContentHashWitness.name: ContentHashWitness,
}


def witness_for(name: str) -> Witness:
    """Return a witness strategy by its settings name (``mtime`` or ``content``)."""

    try:
        return _WITNESSES[name]()
    except KeyError:
        raise InvalidInputError(f"Unknown cache witness: {name!r}") from None


class KeyDeriver:
    """Bind a witness strategy to :func:`derive_cache_key`."""

    def __init__(self, witness: Witness | None = None) -> None:
        self._witness = witness or ModifiedTimeWitness()

    @property
    def witness(self) -> Witness:
        return self._witness

    def use_witness(self, witness: Witness) -> None:
        """Switch strategies; entries keyed by the previous witness become orphans."""

        self._witness = witness

    def key_for(self, source_path: str, max_dimension: int) -> str:
        """Read the witness for *source_path* and derive its key at *max_dimension*."""

        return derive_cache_key(source_path, self._witness.witness(source_path), max_dimension)


__all__ = [
    "ContentHashWitness",
    "KEY_LENGTH",
    "KeyDeriver",
    "ModifiedTimeWitness",
    "Witness",
    "derive_cache_key",
    "is_cache_key",
    "modified_millis",
    "witness_for",
]
