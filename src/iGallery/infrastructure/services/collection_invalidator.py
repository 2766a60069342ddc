"""Directory-scoped removal of thumbnail entries."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from iGallery.cache.keys import KeyDeriver, derive_cache_key
from iGallery.cache.store import ThumbnailStore
from iGallery.config import THUMB_SIZES
from iGallery.errors import ClockError, MetadataError, StorageError
from iGallery.events.bus import EventBus
from iGallery.events.gallery_events import CollectionInvalidatedEvent
from iGallery.io.listing import is_vector, list_images

LOGGER = logging.getLogger(__name__)

Lister = Callable[[str], list[str]]


@dataclass(frozen=True)
class InvalidationOutcome:
    """What happened to the cache entries of one listed image."""

    path: str
    removed: int = 0
    skipped: bool = False
    error: Optional[str] = None


@dataclass
class InvalidationReport:
    directory: str
    outcomes: list[InvalidationOutcome] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return sum(outcome.removed for outcome in self.outcomes)

    @property
    def skipped_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.skipped)

    @property
    def failed(self) -> list[InvalidationOutcome]:
        return [o for o in self.outcomes if o.error is not None and not o.skipped]


def keys_for_image(keys: KeyDeriver, path: str, sizes: Iterable[int]) -> list[str]:
    """Return the key of *path* at every size preset.

    Raises MetadataError or ClockError when the witness cannot be read.
    """
    witness = keys.witness.witness(path)
    return [derive_cache_key(path, witness, size) for size in sizes]


class CollectionInvalidator:
    """Remove the entries the thumbnail service would currently hit for a directory.

    Only entries reachable by recomputing keys for today's files and today's
    size presets are found.  Entries for other directories and entries whose
    source has since been deleted or edited are left alone.
    """

    def __init__(
        self,
        store: ThumbnailStore,
        keys: KeyDeriver,
        sizes: Sequence[int] = THUMB_SIZES,
        lister: Lister = list_images,
        event_bus: EventBus | None = None,
    ):
        self._store = store
        self._keys = keys
        self._sizes = list(sizes)
        self._lister = lister
        self._events = event_bus

    def invalidate_collection(self, directory: str | os.PathLike) -> InvalidationReport:
        directory = os.fspath(directory)
        report = InvalidationReport(directory=directory)

        for path in self._lister(directory):
            if is_vector(path):
                continue
            report.outcomes.append(self._invalidate_one(path))

        LOGGER.info(
            "Invalidated %d thumbnail(s) for %s (%d skipped, %d failed)",
            report.removed_count,
            directory,
            report.skipped_count,
            len(report.failed),
        )
        if self._events:
            self._events.publish(CollectionInvalidatedEvent(
                directory=directory,
                removed_count=report.removed_count,
                skipped_count=report.skipped_count,
            ))
        return report

    def _invalidate_one(self, path: str) -> InvalidationOutcome:
        try:
            candidates = keys_for_image(self._keys, path, self._sizes)
        except (MetadataError, ClockError) as exc:
            # Nothing reachable to invalidate for this file.
            LOGGER.debug("Skipping %s: %s", path, exc)
            return InvalidationOutcome(path=path, skipped=True, error=str(exc))

        removed = 0
        error: Optional[str] = None
        for key in candidates:
            try:
                if self._store.remove(key):
                    removed += 1
            except StorageError as exc:
                LOGGER.warning("Could not remove thumbnail for %s: %s", path, exc)
                error = error or str(exc)
        return InvalidationOutcome(path=path, removed=removed, error=error)
