"""Return a cached thumbnail path, rendering it on a miss."""

from dataclasses import dataclass
from typing import Optional

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.infrastructure.services.thumbnail_service import ThumbnailService


@dataclass(frozen=True)
class GetThumbnailRequest(UseCaseRequest):
    source_path: str = ""
    max_dimension: int = 256


@dataclass(frozen=True)
class GetThumbnailResponse(UseCaseResponse):
    thumbnail_path: Optional[str] = None


class GetThumbnailUseCase(UseCase):
    def __init__(self, thumbnail_service: ThumbnailService, error_handler=None):
        super().__init__(error_handler)
        self._service = thumbnail_service

    def execute(self, request: GetThumbnailRequest) -> GetThumbnailResponse:
        try:
            path = self._service.get_or_create(request.source_path, request.max_dimension)
        except EXPECTED_ERRORS as exc:
            return self._fail(GetThumbnailResponse, exc, source_path=request.source_path)
        return GetThumbnailResponse(thumbnail_path=str(path))
