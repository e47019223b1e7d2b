"""Logging setup for the engine's `mythlings` logger hierarchy."""
from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER_NAME = "mythlings"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Safe to call repeatedly; previously installed handlers are replaced rather
    than stacked.
    """
    if isinstance(level, str):
        resolved_level = logging.getLevelName(level.upper())
        if not isinstance(resolved_level, int):
            resolved_level = logging.INFO
    else:
        resolved_level = level

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolved_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved_level)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
