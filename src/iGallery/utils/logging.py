"""Logging helpers shared by the library and the command line."""

from __future__ import annotations

import logging
import sys

_ROOT_NAME = "iGallery"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given."""

    if not name:
        return logging.getLogger(_ROOT_NAME)
    if name.startswith(_ROOT_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this again replaces that handler, so output follows the current
    ``sys.stderr``.
    """

    logger = get_logger()
    logger.setLevel(level)
    for existing in [h for h in logger.handlers if getattr(h, "_igallery", False)]:
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._igallery = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
