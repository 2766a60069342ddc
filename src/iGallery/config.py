"""Default configuration values for iGallery."""

from __future__ import annotations

from typing import Final

# Extensions recognised by the directory listing, compared lower-cased and
# including the leading dot so they can be matched against ``Path.suffix``.
IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset({
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".bmp",
    ".webp",
    ".svg",
    ".tiff",
    ".tif",
    ".avif",
})

# Resolution-independent formats are served as-is and never thumbnailed.
VECTOR_EXTENSIONS: Final[frozenset[str]] = frozenset({".svg"})

MIME_TYPES: Final[dict[str, str]] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".avif": "image/avif",
}
DEFAULT_MIME: Final[str] = "application/octet-stream"

# Bounding sizes (longest edge, in pixels) the gallery requests.  The
# collection invalidator recomputes one key per preset, so a size used by the
# UI but missing here is never reclaimed.
THUMB_SIZES: Final[list[int]] = [256, 512]
THUMB_SUFFIX: Final[str] = ".jpg"
THUMB_FORMAT: Final[str] = "JPEG"
THUMB_QUALITY: Final[int] = 85
THUMB_WORKERS: Final[int] = 2

APP_DIR_NAME: Final[str] = "iGallery"
CACHE_DIR_NAME: Final[str] = "thumbnails"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
DATA_DIR_ENV: Final[str] = "IGALLERY_DATA_DIR"

# Name stem used when raw pixels are saved into a collection.
CLIPBOARD_STEM: Final[str] = "clipboard"
