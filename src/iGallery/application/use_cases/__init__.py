from .base import UseCase, UseCaseRequest, UseCaseResponse
from .delete_image import DeleteImageRequest, DeleteImageResponse, DeleteImageUseCase
from .get_thumbnail import GetThumbnailRequest, GetThumbnailResponse, GetThumbnailUseCase
from .import_files import ImportFilesRequest, ImportFilesResponse, ImportFilesUseCase
from .invalidate_collection import (
    InvalidateCollectionRequest,
    InvalidateCollectionResponse,
    InvalidateCollectionUseCase,
)
from .list_images import ListImagesRequest, ListImagesResponse, ListImagesUseCase
from .sweep_orphans import SweepOrphansRequest, SweepOrphansResponse, SweepOrphansUseCase
from .update_setting import UpdateSettingRequest, UpdateSettingResponse, UpdateSettingUseCase

__all__ = [
    "DeleteImageRequest",
    "DeleteImageResponse",
    "DeleteImageUseCase",
    "GetThumbnailRequest",
    "GetThumbnailResponse",
    "GetThumbnailUseCase",
    "ImportFilesRequest",
    "ImportFilesResponse",
    "ImportFilesUseCase",
    "InvalidateCollectionRequest",
    "InvalidateCollectionResponse",
    "InvalidateCollectionUseCase",
    "ListImagesRequest",
    "ListImagesResponse",
    "ListImagesUseCase",
    "SweepOrphansRequest",
    "SweepOrphansResponse",
    "SweepOrphansUseCase",
    "UpdateSettingRequest",
    "UpdateSettingResponse",
    "UpdateSettingUseCase",
    "UseCase",
    "UseCaseRequest",
    "UseCaseResponse",
]
