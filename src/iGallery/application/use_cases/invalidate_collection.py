"""Drop the cached thumbnails of every image in one directory."""

from dataclasses import dataclass, field

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.infrastructure.services.collection_invalidator import (
    CollectionInvalidator,
    InvalidationOutcome,
)


@dataclass(frozen=True)
class InvalidateCollectionRequest(UseCaseRequest):
    directory: str = ""


@dataclass(frozen=True)
class InvalidateCollectionResponse(UseCaseResponse):
    removed_count: int = 0
    skipped_count: int = 0
    outcomes: list[InvalidationOutcome] = field(default_factory=list)


class InvalidateCollectionUseCase(UseCase):
    def __init__(self, invalidator: CollectionInvalidator, error_handler=None):
        super().__init__(error_handler)
        self._invalidator = invalidator

    def execute(self, request: InvalidateCollectionRequest) -> InvalidateCollectionResponse:
        try:
            report = self._invalidator.invalidate_collection(request.directory)
        except EXPECTED_ERRORS as exc:
            return self._fail(InvalidateCollectionResponse, exc, directory=request.directory)
        return InvalidateCollectionResponse(
            removed_count=report.removed_count,
            skipped_count=report.skipped_count,
            outcomes=list(report.outcomes),
        )
