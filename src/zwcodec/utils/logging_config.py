"""Logging setup shared by the CLI and the server."""

from __future__ import annotations

import logging
import sys

from zwcodec.config import ZWCODEC_LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_PACKAGE_LOGGERS = ("zwcodec", "server")


class _StderrHandler(logging.StreamHandler):
    """Stream handler installed by :func:`configure_logging`."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)
        self.setFormatter(logging.Formatter(LOG_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        # Follow sys.stderr if it was replaced after setup.
        self.stream = sys.stderr
        super().emit(record)


def configure_logging(level: str | int | None = None) -> None:
    """Attach a stderr handler to the package loggers.

    Safe to call more than once: an existing handler is reused and only the
    level is updated.

    Args:
        level: Log level name or number. Defaults to ``ZWCODEC_LOG_LEVEL``.
    """
    resolved = level if level is not None else ZWCODEC_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    for name in _PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(resolved)
        if not any(isinstance(handler, _StderrHandler) for handler in logger.handlers):
            logger.addHandler(_StderrHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``."""
    return logging.getLogger(name)
