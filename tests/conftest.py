import os
import sys
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


ImageFactory = Callable[..., Path]


@pytest.fixture()
def make_image() -> ImageFactory:
    """Write a solid-colour image of *size* to *path* and return the path."""

    def _make(path: Path, size=(64, 48), mode="RGB", fmt=None, color=None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if color is None:
            color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
        Image.new(mode, size, color).save(path, fmt)
        return path

    return _make


@pytest.fixture()
def set_mtime() -> Callable[[Path, int], None]:
    """Set the modification time of a file in whole milliseconds."""

    def _set(path: Path, millis: int) -> None:
        ns = millis * 1_000_000
        os.utime(path, ns=(ns, ns))

    return _set


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "thumbnails"
