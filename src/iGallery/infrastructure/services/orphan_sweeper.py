"""Maintenance sweep removing thumbnails no live image can reach."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from iGallery.cache.keys import KeyDeriver
from iGallery.cache.store import ThumbnailStore
from iGallery.config import THUMB_SIZES
from iGallery.errors import ClockError, MetadataError, StorageError
from iGallery.io.listing import is_vector, list_images

from .collection_invalidator import Lister, keys_for_image

LOGGER = logging.getLogger(__name__)


@dataclass
class SweepReport:
    scanned: int = 0
    kept: int = 0
    removed: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def removed_count(self) -> int:
        return len(self.removed)


class OrphanSweeper:
    """Delete every cache entry whose key no image under *live_directories* produces.

    Keys carry no reverse mapping, so the only way to tell a live entry from
    an orphan is to recompute the key set of everything still on disk.  Any
    directory that has thumbnails but is not passed in is treated as gone,
    so callers must hand over every collection they still display.  This is
    a slow, explicit operation and never runs as part of a lookup.
    """

    def __init__(
        self,
        store: ThumbnailStore,
        keys: KeyDeriver,
        sizes: Sequence[int] = THUMB_SIZES,
        lister: Lister = list_images,
    ):
        self._store = store
        self._keys = keys
        self._sizes = list(sizes)
        self._lister = lister

    def reachable_keys(self, live_directories: Iterable[str | os.PathLike]) -> set[str]:
        """Return every key the thumbnail service could currently hit.

        Listing errors propagate: a directory that cannot be read must not
        have its entries mistaken for orphans.
        """
        reachable: set[str] = set()
        for directory in live_directories:
            for path in self._lister(os.fspath(directory)):
                if is_vector(path):
                    continue
                try:
                    reachable.update(keys_for_image(self._keys, path, self._sizes))
                except (MetadataError, ClockError) as exc:
                    LOGGER.debug("Skipping unreadable %s: %s", path, exc)
        return reachable

    def sweep(self, live_directories: Iterable[str | os.PathLike]) -> SweepReport:
        reachable = self.reachable_keys(live_directories)
        report = SweepReport()
        for key in list(self._store.iter_keys()):
            report.scanned += 1
            if key in reachable:
                report.kept += 1
                continue
            try:
                if self._store.remove(key):
                    report.removed.append(key)
            except StorageError as exc:
                report.errors[key] = str(exc)
                LOGGER.warning("Could not remove orphaned thumbnail %s: %s", key, exc)

        LOGGER.info(
            "Orphan sweep of %s: %d scanned, %d kept, %d removed",
            self._store.cache_dir,
            report.scanned,
            report.kept,
            report.removed_count,
        )
        return report
