"""Delete a source image from its collection."""

from dataclasses import dataclass
from typing import Optional

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.events.bus import EventBus
from iGallery.events.gallery_events import ImageDeletedEvent
from iGallery.io.file_ops import delete_image


@dataclass(frozen=True)
class DeleteImageRequest(UseCaseRequest):
    path: str = ""


@dataclass(frozen=True)
class DeleteImageResponse(UseCaseResponse):
    pass


class DeleteImageUseCase(UseCase):
    """Delete a source image.  Its thumbnails stay until a sweep reclaims them."""

    def __init__(self, event_bus: Optional[EventBus] = None, error_handler=None):
        super().__init__(error_handler)
        self._event_bus = event_bus

    def execute(self, request: DeleteImageRequest) -> DeleteImageResponse:
        try:
            delete_image(request.path)
        except EXPECTED_ERRORS as exc:
            return self._fail(DeleteImageResponse, exc, path=request.path)
        if self._event_bus is not None:
            self._event_bus.publish(ImageDeletedEvent(path=request.path))
        return DeleteImageResponse()
