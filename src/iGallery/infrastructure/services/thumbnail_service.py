"""Generate-or-fetch thumbnail service backed by the on-disk store."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Protocol, Union

from iGallery.cache.keys import KeyDeriver
from iGallery.cache.stats import CacheStatsCollector
from iGallery.cache.store import ThumbnailStore
from iGallery.config import THUMB_WORKERS
from iGallery.errors import SourceNotFoundError, error_kind
from iGallery.events.bus import EventBus
from iGallery.events.gallery_events import ThumbnailFailedEvent, ThumbnailReadyEvent
from iGallery.io.listing import is_vector

LOGGER = logging.getLogger(__name__)

STATS_NAME = "disk"

PathLike = Union[str, os.PathLike]


class ThumbnailGenerator(Protocol):
    """Protocol for the renderer invoked on a cache miss."""

    def generate(self, source: Union[str, Path, BinaryIO], max_dimension: int) -> bytes: ...


class ThumbnailService:
    """Return a path to a valid cached thumbnail, rendering one only on a miss."""

    def __init__(
        self,
        store: ThumbnailStore,
        generator: ThumbnailGenerator,
        keys: KeyDeriver | None = None,
        executor: ThreadPoolExecutor | None = None,
        stats: CacheStatsCollector | None = None,
        event_bus: EventBus | None = None,
        max_workers: int = THUMB_WORKERS,
    ):
        self._store = store
        self._generator = generator
        self._keys = keys or KeyDeriver()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="thumbnail"
        )
        self._stats = stats
        self._events = event_bus

    @property
    def store(self) -> ThumbnailStore:
        return self._store

    @property
    def keys(self) -> KeyDeriver:
        return self._keys

    def shutdown(self, wait: bool = False) -> None:
        """Shut down the internal executor if it was created by this service.

        Callers that supply their own executor are responsible for its
        lifecycle; calling ``shutdown()`` on those instances is a no-op.
        """
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def key_for(self, source_path: PathLike, max_dimension: int) -> str:
        """Return the key :meth:`get_or_create` would use for these inputs right now."""
        return self._keys.key_for(os.fspath(source_path), max_dimension)

    def get_or_create(self, source_path: PathLike, max_dimension: int) -> Path:
        """Return the thumbnail path for *source_path*, rendering it on a miss.

        Vector sources are returned unchanged.  The path string is used
        verbatim for the key, so pass the same string the listing produced.
        """
        path = os.fspath(source_path)
        if not os.path.isfile(path):
            raise SourceNotFoundError(f"Not a file: {path}")
        if is_vector(path):
            return Path(path)

        key = self._keys.key_for(path, max_dimension)
        if self._store.contains(key):
            self._record("hit")
            return self._store.path_for(key)

        self._record("miss")
        LOGGER.debug("Thumbnail miss for %s at %d px", path, max_dimension)
        try:
            data = self._generator.generate(path, max_dimension)
        except Exception:
            self._record("failure")
            raise
        result = self._store.write(key, data)
        self._record("generated")
        return result

    def request_thumbnail(
        self,
        source_path: PathLike,
        max_dimension: int,
        callback: Optional[Callable[[str, Path], None]] = None,
    ) -> "Future[Path]":
        """Run :meth:`get_or_create` on a worker and return its task handle.

        The future may be ignored: an abandoned request still completes and
        lands in the cache.  *callback* is only invoked on success; failures
        are logged, published and left on the future.
        """
        path = os.fspath(source_path)
        return self._executor.submit(self._generate_and_notify, path, max_dimension, callback)

    def _generate_and_notify(
        self,
        path: str,
        max_dimension: int,
        callback: Optional[Callable[[str, Path], None]],
    ) -> Path:
        try:
            result = self.get_or_create(path, max_dimension)
        except Exception as exc:
            LOGGER.warning("Thumbnail generation failed for %s: %s", path, exc)
            if self._events:
                self._events.publish(ThumbnailFailedEvent(
                    source_path=path,
                    max_dimension=max_dimension,
                    error_kind=error_kind(exc),
                    message=str(exc),
                ))
            raise
        if self._events:
            self._events.publish(ThumbnailReadyEvent(
                source_path=path,
                thumbnail_path=str(result),
                max_dimension=max_dimension,
            ))
        if callback is not None:
            callback(path, result)
        return result

    def _record(self, outcome: str) -> None:
        if self._stats is None:
            return
        if outcome == "hit":
            self._stats.record_hit(STATS_NAME)
        elif outcome == "miss":
            self._stats.record_miss(STATS_NAME)
        elif outcome == "generated":
            self._stats.record_generated(STATS_NAME)
        else:
            self._stats.record_failure(STATS_NAME)
