"""Content-addressed thumbnail cache: key derivation, storage and counters."""

from .keys import (
    ContentHashWitness,
    KeyDeriver,
    ModifiedTimeWitness,
    derive_cache_key,
    modified_millis,
    witness_for,
)
from .stats import CacheStats, CacheStatsCollector
from .store import ThumbnailStore

__all__ = [
    "CacheStats",
    "CacheStatsCollector",
    "ContentHashWitness",
    "KeyDeriver",
    "ModifiedTimeWitness",
    "ThumbnailStore",
    "derive_cache_key",
    "modified_millis",
    "witness_for",
]
