from dataclasses import dataclass, field

from .bus import Event


@dataclass(kw_only=True)
class GalleryEvent(Event):
    """Base of every event the library publishes; subscribe to it to see all of them."""


@dataclass(kw_only=True)
class ThumbnailReadyEvent(GalleryEvent):
    source_path: str = ""
    thumbnail_path: str = ""
    max_dimension: int = 0


@dataclass(kw_only=True)
class ThumbnailFailedEvent(GalleryEvent):
    source_path: str = ""
    max_dimension: int = 0
    error_kind: str = ""
    message: str = ""


@dataclass(kw_only=True)
class CollectionInvalidatedEvent(GalleryEvent):
    directory: str = ""
    removed_count: int = 0
    skipped_count: int = 0


@dataclass(kw_only=True)
class FilesImportedEvent(GalleryEvent):
    target_dir: str = ""
    imported_paths: list[str] = field(default_factory=list)
    mode: str = "copy"


@dataclass(kw_only=True)
class ImageDeletedEvent(GalleryEvent):
    path: str = ""
