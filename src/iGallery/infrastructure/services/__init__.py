from .collection_invalidator import CollectionInvalidator, InvalidationOutcome, InvalidationReport
from .orphan_sweeper import OrphanSweeper, SweepReport
from .thumbnail_generator import PillowThumbnailGenerator, fit_within
from .thumbnail_service import ThumbnailService

__all__ = [
    "CollectionInvalidator",
    "InvalidationOutcome",
    "InvalidationReport",
    "OrphanSweeper",
    "PillowThumbnailGenerator",
    "SweepReport",
    "ThumbnailService",
    "fit_within",
]
