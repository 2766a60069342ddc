"""Tests for ThumbnailService: hit/miss flow, vector bypass and background requests."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from PIL import Image

from iGallery.cache.keys import ContentHashWitness, KeyDeriver
from iGallery.cache.stats import CacheStats, CacheStatsCollector
from iGallery.cache.store import ThumbnailStore
from iGallery.errors import DecodeError, InvalidInputError, SourceNotFoundError
from iGallery.events.bus import EventBus
from iGallery.events.gallery_events import ThumbnailFailedEvent, ThumbnailReadyEvent
from iGallery.infrastructure.services.thumbnail_generator import PillowThumbnailGenerator
from iGallery.infrastructure.services.thumbnail_service import STATS_NAME, ThumbnailService


class CountingGenerator:
    def __init__(self):
        self.calls = []
        self._inner = PillowThumbnailGenerator()
        self._lock = threading.Lock()

    def generate(self, source, max_dimension):
        with self._lock:
            self.calls.append((str(source), max_dimension))
        return self._inner.generate(source, max_dimension)


@pytest.fixture()
def generator():
    return CountingGenerator()


@pytest.fixture()
def stats():
    return CacheStatsCollector()


@pytest.fixture()
def service(cache_dir, generator, stats):
    svc = ThumbnailService(ThumbnailStore(cache_dir), generator, stats=stats)
    yield svc
    svc.shutdown(wait=True)


class TestGetOrCreate:
    def test_miss_then_hit(self, tmp_path, make_image, service, generator, stats, cache_dir):
        src = str(make_image(tmp_path / "photos" / "a.png", size=(2000, 1000)))

        first = service.get_or_create(src, 400)
        second = service.get_or_create(src, 400)

        assert first == second
        assert first.parent == cache_dir.absolute()
        assert first.name == f"{service.key_for(src, 400)}.jpg"
        assert first.stat().st_size > 0
        assert len(generator.calls) == 1
        with Image.open(first) as img:
            assert img.size == (400, 200)
        assert stats.get(STATS_NAME) == CacheStats(hits=1, misses=1, generated=1)

    def test_each_size_is_its_own_entry(self, tmp_path, make_image, service, generator):
        src = str(make_image(tmp_path / "a.png", size=(1000, 1000)))
        small = service.get_or_create(src, 128)
        large = service.get_or_create(src, 512)
        assert small != large
        assert len(generator.calls) == 2

    def test_small_source_not_upscaled(self, tmp_path, make_image, service):
        src = str(make_image(tmp_path / "a.png", size=(200, 150)))
        with Image.open(service.get_or_create(src, 400)) as img:
            assert img.size == (200, 150)

    def test_modified_source_regenerates(self, tmp_path, make_image, set_mtime, service, generator):
        src_path = make_image(tmp_path / "a.png", size=(300, 300))
        set_mtime(src_path, 1_000_000)
        first = service.get_or_create(str(src_path), 100)
        make_image(src_path, size=(300, 150))
        set_mtime(src_path, 2_000_000)
        second = service.get_or_create(str(src_path), 100)

        assert first != second
        assert len(generator.calls) == 2
        with Image.open(second) as img:
            assert img.size == (100, 50)
        # The stale entry stays behind until a sweep.
        assert first.exists()

    def test_vector_returned_unchanged(self, tmp_path, service, generator, cache_dir):
        svg = tmp_path / "logo.svg"
        svg.write_text("<svg xmlns='http://www.w3.org/2000/svg'/>")
        assert service.get_or_create(str(svg), 256) == svg
        assert generator.calls == []
        assert not cache_dir.exists()

    def test_missing_source(self, tmp_path, service, stats):
        with pytest.raises(SourceNotFoundError):
            service.get_or_create(str(tmp_path / "gone.png"), 256)
        assert stats.get(STATS_NAME) == CacheStats()

    def test_directory_source(self, tmp_path, service):
        with pytest.raises(InvalidInputError):
            service.get_or_create(str(tmp_path), 256)

    def test_decode_failure_caches_nothing(self, tmp_path, service, stats, cache_dir):
        bad = tmp_path / "bad.jpg"
        bad.write_bytes(b"garbage")
        with pytest.raises(DecodeError):
            service.get_or_create(str(bad), 256)
        assert not cache_dir.exists() or list(cache_dir.iterdir()) == []
        assert stats.get(STATS_NAME) == CacheStats(misses=1, failures=1)

    def test_existing_entry_served_without_generator(self, tmp_path, make_image, cache_dir, mocker):
        src = str(make_image(tmp_path / "a.png"))
        store = ThumbnailStore(cache_dir)
        keys = KeyDeriver()
        store.write(keys.key_for(src, 256), b"precomputed")
        generator = mocker.Mock()
        svc = ThumbnailService(store, generator, keys=keys)
        try:
            path = svc.get_or_create(src, 256)
        finally:
            svc.shutdown()
        generator.generate.assert_not_called()
        assert path.read_bytes() == b"precomputed"

    def test_content_witness(self, tmp_path, make_image, set_mtime, cache_dir, generator):
        svc = ThumbnailService(ThumbnailStore(cache_dir), generator, keys=KeyDeriver(ContentHashWitness()))
        try:
            src = make_image(tmp_path / "a.png")
            set_mtime(src, 1_000)
            first = svc.get_or_create(str(src), 64)
            set_mtime(src, 5_000)
            assert svc.get_or_create(str(src), 64) == first
        finally:
            svc.shutdown()
        assert len(generator.calls) == 1


class TestRequestThumbnail:
    def test_future_resolves_and_callback_runs(self, tmp_path, make_image, service):
        src = str(make_image(tmp_path / "a.png", size=(500, 250)))
        seen = []
        future = service.request_thumbnail(src, 100, lambda p, t: seen.append((p, t)))
        result = future.result(timeout=10)
        assert result.exists()
        assert seen == [(src, result)]

    def test_abandoned_request_still_caches(self, tmp_path, make_image, service, generator):
        src = str(make_image(tmp_path / "a.png"))
        service.request_thumbnail(src, 32)
        service.shutdown(wait=True)
        assert len(generator.calls) == 1
        assert service.store.contains(service.key_for(src, 32))

    def test_events_published(self, tmp_path, make_image, cache_dir, generator):
        bus = EventBus()
        ready, failed = [], []
        bus.subscribe(ThumbnailReadyEvent, ready.append)
        bus.subscribe(ThumbnailFailedEvent, failed.append)
        svc = ThumbnailService(ThumbnailStore(cache_dir), generator, event_bus=bus)
        try:
            good = str(make_image(tmp_path / "good.png"))
            bad = tmp_path / "bad.png"
            bad.write_bytes(b"nope")

            result = svc.request_thumbnail(good, 32).result(timeout=10)
            with pytest.raises(DecodeError):
                svc.request_thumbnail(str(bad), 32).result(timeout=10)
        finally:
            svc.shutdown(wait=True)
            bus.shutdown()

        assert [e.thumbnail_path for e in ready] == [str(result)]
        assert len(failed) == 1
        assert failed[0].source_path == str(bad)
        assert failed[0].error_kind == "decode"

    def test_callback_not_called_on_failure(self, tmp_path, service):
        callback_calls = []
        future = service.request_thumbnail(str(tmp_path / "missing.png"), 32, lambda *a: callback_calls.append(a))
        with pytest.raises(SourceNotFoundError):
            future.result(timeout=10)
        assert callback_calls == []

    def test_concurrent_requests_converge(self, tmp_path, make_image, cache_dir, generator):
        src = str(make_image(tmp_path / "a.png", size=(640, 480)))
        svc = ThumbnailService(ThumbnailStore(cache_dir), generator, max_workers=4)
        try:
            futures = [svc.request_thumbnail(src, 64) for _ in range(8)]
            paths = {f.result(timeout=10) for f in futures}
        finally:
            svc.shutdown(wait=True)
        assert len(paths) == 1
        path = paths.pop()
        with Image.open(path) as img:
            assert img.size == (64, 48)
        assert [p.name for p in cache_dir.iterdir()] == [path.name]

    def test_external_executor_not_shut_down(self, cache_dir, generator):
        executor = ThreadPoolExecutor(max_workers=1)
        svc = ThumbnailService(ThumbnailStore(cache_dir), generator, executor=executor)
        svc.shutdown(wait=True)
        assert executor.submit(lambda: 42).result(timeout=5) == 42
        executor.shutdown()
