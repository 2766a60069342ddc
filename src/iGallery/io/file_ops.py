"""Plain file operations on collections: import, delete and saving raw pixels."""

from __future__ import annotations

import logging
import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal

from PIL import Image

from ..config import CLIPBOARD_STEM
from ..errors import EncodeError, InvalidInputError, StorageError
from ..utils.pathutils import unique_destination

LOGGER = logging.getLogger(__name__)

ImportMode = Literal["copy", "move"]


@dataclass
class ImportReport:
    """Outcome of :func:`import_files`; destinations are in source order."""

    imported: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def imported_count(self) -> int:
        return len(self.imported)


def _move(source: Path, dest: Path) -> None:
    try:
        os.rename(source, dest)
    except OSError:
        # Cross-device renames fail; fall back to copy + delete.
        shutil.copy2(source, dest)
        source.unlink()


def import_files(
    sources: Iterable[str | os.PathLike[str]],
    target_dir: str | os.PathLike[str],
    mode: ImportMode = "copy",
) -> ImportReport:
    """Copy or move *sources* into *target_dir* without overwriting anything.

    A name already taken in the target becomes ``<stem>_<n><ext>`` with the
    lowest free ``n``.  Sources that are not regular files are skipped and
    per-file failures are recorded; neither stops the batch.
    """

    if mode not in ("copy", "move"):
        raise InvalidInputError(f"Unknown import mode: {mode!r}")
    target = Path(target_dir)
    if not target.is_dir():
        raise InvalidInputError(f"Target is not a directory: {target_dir}")

    report = ImportReport()
    for raw in sources:
        source = Path(raw)
        if not source.is_file():
            report.skipped.append(str(raw))
            continue

        dest = unique_destination(target, source.name)
        try:
            if mode == "move":
                _move(source, dest)
            else:
                shutil.copy2(source, dest)
        except OSError as exc:
            LOGGER.error("Failed to import %s: %s", source, exc)
            report.failed[str(raw)] = str(exc)
            continue
        report.imported.append(str(dest.absolute()))

    LOGGER.info(
        "Imported %d file(s) into %s (%s), %d skipped, %d failed",
        report.imported_count,
        target,
        mode,
        len(report.skipped),
        len(report.failed),
    )
    return report


def delete_image(path: str | os.PathLike[str]) -> None:
    """Delete the regular file at *path*."""

    file_path = Path(path)
    if not file_path.is_file():
        raise InvalidInputError(f"Not a file: {path}")
    try:
        file_path.unlink()
    except OSError as exc:
        raise StorageError(f"Cannot delete {path}: {exc}") from exc


def save_rgba_image(
    rgba: bytes,
    width: int,
    height: int,
    target_dir: str | os.PathLike[str],
) -> Path:
    """Encode raw RGBA pixels as ``clipboard_<millis>.png`` inside *target_dir*."""

    target = Path(target_dir)
    if not target.is_dir():
        raise InvalidInputError(f"Target is not a directory: {target_dir}")
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Invalid image size {width}x{height}")
    if len(rgba) != width * height * 4:
        raise InvalidInputError(
            f"Expected {width * height * 4} bytes of RGBA data, got {len(rgba)}"
        )

    millis = time.time_ns() // 1_000_000
    dest = unique_destination(target, f"{CLIPBOARD_STEM}_{millis}.png")
    image = Image.frombytes("RGBA", (width, height), bytes(rgba))
    try:
        image.save(dest, "PNG")
    except OSError as exc:
        raise EncodeError(f"Cannot write {dest}: {exc}", source=str(dest)) from exc
    return dest.absolute()


__all__ = ["ImportReport", "delete_image", "import_files", "save_rgba_image"]
