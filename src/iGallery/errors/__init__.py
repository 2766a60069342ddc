"""Custom exception hierarchy for iGallery."""

from __future__ import annotations


class IGalleryError(Exception):
    """Base class for all custom errors raised by iGallery."""


# --- 3-layer hierarchy ---

class DomainError(IGalleryError):
    """Base class for domain-level errors."""


class InfrastructureError(IGalleryError):
    """Base class for infrastructure-level errors."""


class ApplicationError(IGalleryError):
    """Base class for application-level errors."""


# --- Domain errors ---

class InvalidInputError(DomainError):
    """Raised when a path or argument does not satisfy an operation's contract."""


class SourceNotFoundError(InvalidInputError):
    """Raised when a source path does not reference an existing regular file."""


class ClockError(DomainError):
    """Raised when a timestamp lies before the Unix epoch."""


# --- Infrastructure errors ---

class StorageError(InfrastructureError):
    """Raised when a read, write or remove on durable storage fails."""


class MetadataError(StorageError):
    """Raised when file metadata (e.g. the modification time) cannot be read."""


class ThumbnailError(InfrastructureError):
    """Base class for thumbnail rendering failures."""

    def __init__(self, message: str, *, source: object = None) -> None:
        super().__init__(message)
        self.source = source


class DecodeError(ThumbnailError):
    """Raised when the source bytes are not a valid or supported image."""


class EncodeError(ThumbnailError):
    """Raised when the decoded image cannot be written in the cache format."""


# --- DI-specific errors ---

class CircularDependencyError(IGalleryError):
    """Raised when a circular dependency is detected during resolution."""


class ResolutionError(IGalleryError):
    """Raised when a dependency cannot be resolved."""


# --- Settings ---

class SettingsError(IGalleryError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


def error_kind(exc: BaseException) -> str:
    """Return the short failure category reported to callers for *exc*."""

    if isinstance(exc, (InvalidInputError, SettingsValidationError)):
        return "invalid_input"
    if isinstance(exc, ClockError):
        return "time"
    if isinstance(exc, DecodeError):
        return "decode"
    if isinstance(exc, EncodeError):
        return "encode"
    if isinstance(exc, (StorageError, SettingsLoadError, OSError)):
        return "io"
    return "internal"


__all__ = [
    "ApplicationError",
    "CircularDependencyError",
    "ClockError",
    "DecodeError",
    "DomainError",
    "EncodeError",
    "IGalleryError",
    "InfrastructureError",
    "InvalidInputError",
    "MetadataError",
    "ResolutionError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "SourceNotFoundError",
    "StorageError",
    "ThumbnailError",
    "error_kind",
]
