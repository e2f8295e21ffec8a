# === FILE: link_scout/logger.py ===
"""Project-wide logging configuration for **LinkScout**.

Highlights
----------
* Unified format for console and optional file output (with rotation).
* Single, importable instance :data:`logger` – simply::

      from link_scout.logger import logger
      logger.info("Crawl started")
* Re‑configurable at runtime via :func:`configure`.
* ``queued=True`` routes every record through one :class:`QueueListener`
  thread that owns the real handlers, so a multi-line page record is always
  written in one piece.
"""
from __future__ import annotations

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "LinkScout"

_LevelT = Union[int, str]

_listener: Optional[QueueListener] = None


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _stdout_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def stop_listener() -> None:
    """Flush and stop the background log writer, if one is running."""
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
    queued: bool = False,
) -> logging.Logger:
    """(Re)configure the global project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a logfile. *None* → console‑only output.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* – remove existing handlers; *False* – just append new one(s).
    queued
        *True* – hand records to a single listener thread instead of writing
        them from the calling thread.
    """
    global _listener
    stop_listener()

    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        lg.handlers.clear()

    handlers: List[logging.Handler] = [_stdout_handler(log_format)]
    if log_file is not None:
        handlers.append(_file_handler(log_file, log_format))

    if queued:
        records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        lg.addHandler(QueueHandler(records))
        _listener = QueueListener(records, *handlers, respect_handler_level=True)
        _listener.start()
    else:
        for handler in handlers:
            lg.addHandler(handler)

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    queued: bool = False,
) -> logging.Logger:
    """Short alias used by the CLI."""
    return configure(
        level=level,
        log_file=log_file,
        log_format=log_format,
        replace_handlers=True,
        queued=queued,
    )


atexit.register(stop_listener)

# --------------------------------------------------------------------------- #
# Ready‑to‑use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "stop_listener"]
