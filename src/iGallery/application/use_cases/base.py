"""Request/response base classes shared by every use case."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

from iGallery.errors import IGalleryError, error_kind
from iGallery.errors.handler import ErrorHandler, ErrorSeverity


@dataclass(frozen=True)
class UseCaseRequest:
    """Use Case input DTO base."""
    pass


@dataclass(frozen=True)
class UseCaseResponse:
    """Use Case output DTO base."""
    success: bool = True
    error: Optional[str] = None
    error_kind: Optional[str] = None


ResponseT = TypeVar("ResponseT", bound=UseCaseResponse)


class UseCase(ABC):
    """Use Case base class.

    ``execute`` never raises for expected failures: library errors and
    ``OSError`` are turned into a failed response of the subclass's type.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        self._error_handler = error_handler

    @abstractmethod
    def execute(self, request: UseCaseRequest) -> UseCaseResponse:
        ...

    def _fail(self, response_cls: Type[ResponseT], exc: Exception, **context) -> ResponseT:
        if self._error_handler is not None:
            self._error_handler.handle(exc, ErrorSeverity.WARNING, context)
        return response_cls(success=False, error=str(exc), error_kind=error_kind(exc))


# Exceptions a use case reports as a failed response instead of raising.
EXPECTED_ERRORS = (IGalleryError, OSError)
