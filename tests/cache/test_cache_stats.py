"""Tests for CacheStatsCollector hit/miss tracking."""

from __future__ import annotations

import threading

import pytest

from iGallery.cache.stats import CacheStats, CacheStatsCollector


class TestCacheStats:
    def test_empty(self):
        s = CacheStats()
        assert s.lookups == 0
        assert s.hit_rate == 0.0

    def test_mixed(self):
        s = CacheStats(hits=7, misses=3)
        assert s.hit_rate == pytest.approx(0.7)
        assert s.lookups == 10


class TestCacheStatsCollector:
    def test_record_each_counter(self):
        c = CacheStatsCollector()
        c.record_hit("disk")
        c.record_miss("disk")
        c.record_generated("disk")
        c.record_failure("disk")
        assert c.get("disk") == CacheStats(hits=1, misses=1, generated=1, failures=1)

    def test_unknown_name_is_empty(self):
        assert CacheStatsCollector().get("nope") == CacheStats()

    def test_all_and_reset(self):
        c = CacheStatsCollector()
        c.record_hit("b")
        c.record_miss("a")
        assert list(c.all()) == ["a", "b"]
        c.reset("a")
        assert list(c.all()) == ["b"]
        c.reset()
        assert c.all() == {}

    def test_thread_safety(self):
        c = CacheStatsCollector()

        def worker():
            for _ in range(500):
                c.record_hit("disk")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert c.get("disk").hits == 2000
