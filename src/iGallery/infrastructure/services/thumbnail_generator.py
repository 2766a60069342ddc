from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from iGallery.config import THUMB_FORMAT, THUMB_QUALITY
from iGallery.errors import DecodeError, EncodeError, InvalidInputError

LOGGER = logging.getLogger(__name__)

Source = Union[str, Path, BinaryIO]


def fit_within(size: Tuple[int, int], max_dimension: int) -> Tuple[int, int]:
    """Return *size* scaled so its larger side equals *max_dimension*.

    Sizes already inside the bound are returned unchanged; thumbnails are
    never upscaled.
    """
    width, height = size
    larger = max(width, height)
    if larger <= max_dimension:
        return width, height
    scale = max_dimension / larger
    if width >= height:
        return max_dimension, max(1, round(height * scale))
    return max(1, round(width * scale)), max_dimension


class PillowThumbnailGenerator:
    """
    Decodes any format Pillow recognises and re-encodes a bounded JPEG.
    """

    def __init__(self, quality: int = THUMB_QUALITY, background: Tuple[int, int, int] = (255, 255, 255)):
        self._quality = quality
        self._background = background

    def generate(self, source: Source, max_dimension: int) -> bytes:
        """
        Render *source* into encoded thumbnail bytes no larger than *max_dimension*.

        Raises DecodeError when the source is not a readable image and
        EncodeError when the result cannot be written.
        """
        if max_dimension < 1:
            raise InvalidInputError(f"max_dimension must be positive, got {max_dimension}")

        image = self._decode(source)
        target = fit_within(image.size, max_dimension)
        if target != image.size:
            image = image.resize(target, Image.Resampling.LANCZOS)
        return self._encode(image, source)

    def _decode(self, source: Source) -> Image.Image:
        label = _describe(source)
        try:
            # Pillow sniffs the format from the leading bytes, not the name.
            with Image.open(source) as img:
                img.seek(0)
                img.load()
                img = ImageOps.exif_transpose(img)
                return self._flatten(img)
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Unsupported or corrupt image {label}: {exc}", source=label) from exc
        except (OSError, ValueError, SyntaxError) as exc:
            # Truncated files surface as OSError, broken headers as SyntaxError.
            raise DecodeError(f"Failed to decode {label}: {exc}", source=label) from exc

    def _flatten(self, img: Image.Image) -> Image.Image:
        if img.mode == "RGB":
            return img.copy()
        if img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info):
            rgba = img.convert("RGBA")
            canvas = Image.new("RGB", rgba.size, self._background)
            canvas.paste(rgba, mask=rgba.getchannel("A"))
            return canvas
        return img.convert("RGB")

    def _encode(self, image: Image.Image, source: Source) -> bytes:
        buffer = io.BytesIO()
        try:
            image.save(buffer, THUMB_FORMAT, quality=self._quality, optimize=True)
        except (OSError, ValueError, KeyError) as exc:
            label = _describe(source)
            LOGGER.warning("Failed to encode thumbnail for %s: %s", label, exc)
            raise EncodeError(f"Failed to encode thumbnail for {label}: {exc}", source=label) from exc
        return buffer.getvalue()


def _describe(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    name = getattr(source, "name", None)
    return str(name) if name else "<stream>"
