"""Copy or move files into a collection directory."""

from dataclasses import dataclass, field
from typing import Optional

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.events.bus import EventBus
from iGallery.events.gallery_events import FilesImportedEvent
from iGallery.io.file_ops import import_files


@dataclass(frozen=True)
class ImportFilesRequest(UseCaseRequest):
    source_paths: list[str] = field(default_factory=list)
    target_dir: str = ""
    mode: str = "copy"


@dataclass(frozen=True)
class ImportFilesResponse(UseCaseResponse):
    imported_paths: list[str] = field(default_factory=list)
    skipped_paths: list[str] = field(default_factory=list)
    failed_paths: dict[str, str] = field(default_factory=dict)


class ImportFilesUseCase(UseCase):
    def __init__(self, event_bus: Optional[EventBus] = None, error_handler=None):
        super().__init__(error_handler)
        self._event_bus = event_bus

    def execute(self, request: ImportFilesRequest) -> ImportFilesResponse:
        try:
            report = import_files(request.source_paths, request.target_dir, request.mode)
        except EXPECTED_ERRORS as exc:
            return self._fail(ImportFilesResponse, exc, target_dir=request.target_dir)

        if report.imported and self._event_bus is not None:
            self._event_bus.publish(FilesImportedEvent(
                target_dir=request.target_dir,
                imported_paths=list(report.imported),
                mode=request.mode,
            ))

        return ImportFilesResponse(
            imported_paths=list(report.imported),
            skipped_paths=list(report.skipped),
            failed_paths=dict(report.failed),
        )
