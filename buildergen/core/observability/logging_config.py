"""
Logging configuration for the ``buildergen`` CLI.

Library modules only do ``logger = logging.getLogger(__name__)``; this
module is the one place that attaches handlers, and only ``main.py``
calls it.  Console level comes from the CLI flags, then
BUILDERGEN_LOG_LEVEL, then WARNING.  BUILDERGEN_LOG_FILE adds a file
handler at BUILDERGEN_LOG_FILE_LEVEL (default: the console level).
"""

from __future__ import annotations

import logging
import sys

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%Y-%m-%d %H:%M:%S")

# (most verbose level the format applies to, format, datefmt)
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)


def _console_format(level: int) -> tuple[str, str | None]:
    for ceiling, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= ceiling:
            return fmt, datefmt
    return "%(message)s", None


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str | None) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers for a CLI run.

    The root level is the most verbose of the console and file levels,
    so each handler filters on its own.
    """
    console_level = parse_level(level)
    handlers = [_handler(logging.StreamHandler(sys.stderr), console_level, *_console_format(console_level))]

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, *_FILE_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name to its numeric value; WARNING for blank or unknown names."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
