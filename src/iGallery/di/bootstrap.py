"""Wire the thumbnail cache and collection services into a container."""

from __future__ import annotations

import logging

from .container import Container
from ..application.use_cases import (
    DeleteImageUseCase,
    GetThumbnailUseCase,
    ImportFilesUseCase,
    InvalidateCollectionUseCase,
    ListImagesUseCase,
    SweepOrphansUseCase,
    UpdateSettingUseCase,
)
from ..cache.keys import KeyDeriver, witness_for
from ..cache.stats import CacheStatsCollector
from ..cache.store import ThumbnailStore
from ..errors.handler import ErrorHandler
from ..events.bus import EventBus
from ..infrastructure.services.collection_invalidator import CollectionInvalidator
from ..infrastructure.services.orphan_sweeper import OrphanSweeper
from ..infrastructure.services.thumbnail_generator import PillowThumbnailGenerator
from ..infrastructure.services.thumbnail_service import ThumbnailService
from ..settings.manager import SettingsManager

LOGGER = logging.getLogger(__name__)


def bootstrap(container: Container, settings: SettingsManager) -> None:
    """Register all application services in the DI container.

    *settings* must already be loaded.  Sizes, quality, worker count and
    cache location are read once here; the key witness follows later
    changes to ``thumbnails.witness``.
    """

    container.register_instance(SettingsManager, settings)
    container.register_singleton(EventBus, EventBus)
    container.register_singleton(CacheStatsCollector, CacheStatsCollector)
    container.register_factory(
        ErrorHandler,
        lambda: ErrorHandler(logging.getLogger("iGallery"), container.resolve(EventBus)),
        singleton=True,
    )

    container.register_factory(
        ThumbnailStore,
        lambda: ThumbnailStore(settings.cache_dir()),
        singleton=True,
    )
    container.register_factory(
        KeyDeriver,
        lambda: KeyDeriver(witness_for(settings.get("thumbnails.witness", "mtime"))),
        singleton=True,
    )
    settings.add_listener(lambda key, value: _apply_witness(container, settings, key))

    container.register_factory(
        PillowThumbnailGenerator,
        lambda: PillowThumbnailGenerator(quality=settings.get("thumbnails.quality")),
        singleton=True,
    )
    container.register_factory(
        ThumbnailService,
        lambda: ThumbnailService(
            store=container.resolve(ThumbnailStore),
            generator=container.resolve(PillowThumbnailGenerator),
            keys=container.resolve(KeyDeriver),
            stats=container.resolve(CacheStatsCollector),
            event_bus=container.resolve(EventBus),
            max_workers=settings.get("thumbnails.workers"),
        ),
        singleton=True,
    )
    container.register_factory(
        CollectionInvalidator,
        lambda: CollectionInvalidator(
            store=container.resolve(ThumbnailStore),
            keys=container.resolve(KeyDeriver),
            sizes=settings.thumbnail_sizes(),
            event_bus=container.resolve(EventBus),
        ),
        singleton=True,
    )
    container.register_factory(
        OrphanSweeper,
        lambda: OrphanSweeper(
            store=container.resolve(ThumbnailStore),
            keys=container.resolve(KeyDeriver),
            sizes=settings.thumbnail_sizes(),
        ),
    )

    container.register_factory(
        GetThumbnailUseCase,
        lambda: GetThumbnailUseCase(container.resolve(ThumbnailService), container.resolve(ErrorHandler)),
    )
    container.register_factory(
        InvalidateCollectionUseCase,
        lambda: InvalidateCollectionUseCase(
            container.resolve(CollectionInvalidator), container.resolve(ErrorHandler)
        ),
    )
    container.register_factory(
        ImportFilesUseCase,
        lambda: ImportFilesUseCase(container.resolve(EventBus), container.resolve(ErrorHandler)),
    )
    container.register_factory(
        DeleteImageUseCase,
        lambda: DeleteImageUseCase(container.resolve(EventBus), container.resolve(ErrorHandler)),
    )
    container.register_factory(
        SweepOrphansUseCase,
        lambda: SweepOrphansUseCase(container.resolve(OrphanSweeper), container.resolve(ErrorHandler)),
    )
    container.register_factory(
        ListImagesUseCase,
        lambda: ListImagesUseCase(container.resolve(ErrorHandler)),
    )
    container.register_factory(
        UpdateSettingUseCase,
        lambda: UpdateSettingUseCase(settings, container.resolve(ErrorHandler)),
    )


def _apply_witness(container: Container, settings: SettingsManager, key: str) -> None:
    if key not in ("thumbnails", "thumbnails.witness"):
        return
    name = settings.get("thumbnails.witness", "mtime")
    deriver = container.resolve(KeyDeriver)
    if deriver.witness.name != name:
        LOGGER.info("Cache witness changed to %s", name)
        deriver.use_witness(witness_for(name))
