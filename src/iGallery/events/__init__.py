from .bus import Event, EventBus, Subscription
from .gallery_events import (
    CollectionInvalidatedEvent,
    FilesImportedEvent,
    GalleryEvent,
    ImageDeletedEvent,
    ThumbnailFailedEvent,
    ThumbnailReadyEvent,
)

__all__ = [
    "CollectionInvalidatedEvent",
    "Event",
    "EventBus",
    "FilesImportedEvent",
    "GalleryEvent",
    "ImageDeletedEvent",
    "Subscription",
    "ThumbnailFailedEvent",
    "ThumbnailReadyEvent",
]
