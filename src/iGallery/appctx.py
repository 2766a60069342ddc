"""Application-wide context exposed to the display shell."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from .application.use_cases import (
    DeleteImageRequest,
    DeleteImageResponse,
    DeleteImageUseCase,
    GetThumbnailRequest,
    GetThumbnailResponse,
    GetThumbnailUseCase,
    ImportFilesRequest,
    ImportFilesResponse,
    ImportFilesUseCase,
    InvalidateCollectionRequest,
    InvalidateCollectionResponse,
    InvalidateCollectionUseCase,
    ListImagesRequest,
    ListImagesResponse,
    ListImagesUseCase,
    SweepOrphansRequest,
    SweepOrphansResponse,
    SweepOrphansUseCase,
    UpdateSettingRequest,
    UpdateSettingResponse,
    UpdateSettingUseCase,
)
from .cache.stats import CacheStatsCollector
from .di.bootstrap import bootstrap
from .di.container import Container
from .events.bus import EventBus
from .infrastructure.services.thumbnail_service import ThumbnailService
from .settings.manager import SettingsManager


def _create_settings_manager() -> SettingsManager:
    manager = SettingsManager()
    manager.load()
    return manager


def _create_di_container(settings: SettingsManager) -> Container:
    container = Container()
    bootstrap(container, settings)
    return container


@dataclass
class AppContext:
    """Entry points the UI calls; every method reports failure in its response."""

    settings: SettingsManager = field(default_factory=_create_settings_manager)
    container: Optional[Container] = None

    def __post_init__(self) -> None:
        if self.container is None:
            self.container = _create_di_container(self.settings)

    @classmethod
    def for_data_dir(cls, data_dir: Path) -> "AppContext":
        """Build a context whose settings and cache live under *data_dir*."""

        settings = SettingsManager(path=data_dir / "settings.json")
        settings.load()
        return cls(settings=settings)

    @property
    def events(self) -> EventBus:
        return self.container.resolve(EventBus)

    @property
    def stats(self) -> CacheStatsCollector:
        return self.container.resolve(CacheStatsCollector)

    @property
    def thumbnails(self) -> ThumbnailService:
        return self.container.resolve(ThumbnailService)

    def list_images(self, directory: str) -> ListImagesResponse:
        return self.container.resolve(ListImagesUseCase).execute(ListImagesRequest(directory=directory))

    def get_or_create_thumbnail(self, path: str, max_dimension: int) -> GetThumbnailResponse:
        return self.container.resolve(GetThumbnailUseCase).execute(
            GetThumbnailRequest(source_path=path, max_dimension=max_dimension)
        )

    def request_thumbnail(
        self,
        path: str,
        max_dimension: int,
        callback: Optional[Callable[[str, Path], None]] = None,
    ) -> "Future[Path]":
        """Render in the background; see :meth:`ThumbnailService.request_thumbnail`."""

        return self.thumbnails.request_thumbnail(path, max_dimension, callback)

    def invalidate_collection(self, directory: str) -> InvalidateCollectionResponse:
        return self.container.resolve(InvalidateCollectionUseCase).execute(
            InvalidateCollectionRequest(directory=directory)
        )

    def import_files(self, sources: Iterable[str], target_dir: str, mode: str = "copy") -> ImportFilesResponse:
        return self.container.resolve(ImportFilesUseCase).execute(
            ImportFilesRequest(source_paths=list(sources), target_dir=target_dir, mode=mode)
        )

    def delete_image(self, path: str) -> DeleteImageResponse:
        return self.container.resolve(DeleteImageUseCase).execute(DeleteImageRequest(path=path))

    def sweep_orphans(self, live_directories: Iterable[str]) -> SweepOrphansResponse:
        return self.container.resolve(SweepOrphansUseCase).execute(
            SweepOrphansRequest(live_directories=list(live_directories))
        )

    def update_setting(self, key: str, value: Any) -> UpdateSettingResponse:
        return self.container.resolve(UpdateSettingUseCase).execute(UpdateSettingRequest(key=key, value=value))

    def shutdown(self) -> None:
        self.thumbnails.shutdown(wait=True)
        self.events.shutdown()
