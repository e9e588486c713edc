"""Logging setup for eventblock.

All diagnostics go to *stderr* so the CLI's stdout carries nothing but the
event block (or the "no events" sentinel).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks the handler installed here so repeated calls stay idempotent.
_HANDLER_ATTR = "_eventblock_log_handler"

# httpx logs every request line at INFO; only show it when debugging.
_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger for eventblock.

    Attaches one :class:`logging.StreamHandler` with the project format
    and quiets the HTTP client loggers unless *level* is ``DEBUG``.
    Calling this again only updates the level.

    Args:
        level: A standard logging level name (e.g. ``"DEBUG"``,
            ``"INFO"``, ``"WARNING"``).
        stream: Destination for log records.  Defaults to *stderr*.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    client_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    existing = [h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)]
    if existing:
        for handler in existing:
            handler.setLevel(numeric_level)
        return

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger (``logging.getLogger`` shorthand)."""
    return logging.getLogger(name)
