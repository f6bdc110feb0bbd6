"""Logging setup for the ``cachematrix`` logger hierarchy.

The library itself only ever calls ``logging.getLogger(__name__)``; the
package root carries a ``NullHandler`` so nothing is printed unless the
application configures logging or calls ``configure_logging``.
"""
from __future__ import annotations

import logging
import sys
from typing import IO

from .runtime import parse_log_level, runtime


ROOT_LOGGER_NAME = "cachematrix"

_handler: logging.Handler | None = None


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter, optionally with module/function/line."""

    def __init__(self, include_location: bool = False):
        if include_location:
            fmt = "%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"
        else:
            fmt = "%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")


def install_null_handler() -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())


def configure_logging(
    level: str | int | None = None,
    *,
    stream: IO[str] | None = None,
    include_location: bool = False,
) -> logging.Logger:
    """Attach a stream handler to the ``cachematrix`` logger.

    Args:
        level: Level name or number. ``None`` uses ``CACHEMATRIX_LOG_LEVEL``
            (default ``WARNING``).
        stream: Target stream, ``sys.stderr`` by default.
        include_location: Include module/function/line in each record.

    Calling this again replaces the previously installed handler.
    """
    global _handler

    resolved = runtime.log_level() if level is None else parse_log_level(level)
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ContextualFormatter(include_location=include_location))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    _handler = handler
    return logger
