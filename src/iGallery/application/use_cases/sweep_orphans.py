"""Reclaim thumbnails that no image in the live collections can reach."""

from dataclasses import dataclass, field

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.infrastructure.services.orphan_sweeper import OrphanSweeper


@dataclass(frozen=True)
class SweepOrphansRequest(UseCaseRequest):
    live_directories: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SweepOrphansResponse(UseCaseResponse):
    scanned: int = 0
    kept: int = 0
    removed_keys: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def removed_count(self) -> int:
        return len(self.removed_keys)


class SweepOrphansUseCase(UseCase):
    def __init__(self, sweeper: OrphanSweeper, error_handler=None):
        super().__init__(error_handler)
        self._sweeper = sweeper

    def execute(self, request: SweepOrphansRequest) -> SweepOrphansResponse:
        try:
            report = self._sweeper.sweep(request.live_directories)
        except EXPECTED_ERRORS as exc:
            return self._fail(
                SweepOrphansResponse, exc, live_directories=list(request.live_directories)
            )
        return SweepOrphansResponse(
            scanned=report.scanned,
            kept=report.kept,
            removed_keys=list(report.removed),
            errors=dict(report.errors),
        )
