"""Hit/miss counters for the thumbnail cache.

The service records one event per ``get_or_create`` call that reaches the
store; vector sources and validation failures are not counted.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """Immutable snapshot of one cache's counters."""

    hits: int = 0
    misses: int = 0
    generated: int = 0
    failures: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate in [0.0, 1.0]; 0.0 before the first lookup."""
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups


class CacheStatsCollector:
    """Thread-safe per-name counters shared by concurrent workers."""

    _FIELDS = ("hits", "misses", "generated", "failures")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, dict[str, int]] = {}

    def _bump(self, cache_name: str, field: str) -> None:
        with self._lock:
            counters = self._counters.setdefault(cache_name, dict.fromkeys(self._FIELDS, 0))
            counters[field] += 1

    def record_hit(self, cache_name: str) -> None:
        self._bump(cache_name, "hits")

    def record_miss(self, cache_name: str) -> None:
        self._bump(cache_name, "misses")

    def record_generated(self, cache_name: str) -> None:
        self._bump(cache_name, "generated")

    def record_failure(self, cache_name: str) -> None:
        self._bump(cache_name, "failures")

    def get(self, cache_name: str) -> CacheStats:
        with self._lock:
            counters = self._counters.get(cache_name)
            return CacheStats(**counters) if counters else CacheStats()

    def all(self) -> dict[str, CacheStats]:
        with self._lock:
            return {name: CacheStats(**self._counters[name]) for name in sorted(self._counters)}

    def reset(self, cache_name: str | None = None) -> None:
        """Reset counters.  If *cache_name* is ``None``, reset all."""
        with self._lock:
            if cache_name is None:
                self._counters.clear()
            else:
                self._counters.pop(cache_name, None)
