"""Local image gallery backend: listing, imports and an on-disk thumbnail cache."""

__version__ = "0.3.0"
