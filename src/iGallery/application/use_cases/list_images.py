"""List the images of one collection directory."""

from dataclasses import dataclass, field

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.io.listing import list_images


@dataclass(frozen=True)
class ListImagesRequest(UseCaseRequest):
    directory: str = ""


@dataclass(frozen=True)
class ListImagesResponse(UseCaseResponse):
    paths: list[str] = field(default_factory=list)


class ListImagesUseCase(UseCase):
    def execute(self, request: ListImagesRequest) -> ListImagesResponse:
        try:
            paths = list_images(request.directory)
        except EXPECTED_ERRORS as exc:
            return self._fail(ListImagesResponse, exc, directory=request.directory)
        return ListImagesResponse(paths=paths)
