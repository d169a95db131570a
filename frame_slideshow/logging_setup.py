"""Logging configuration for slideshow runs.

Console output goes to stdout at INFO (DEBUG with ``verbose``). A log file,
when requested, always records DEBUG with timestamps so a failed build can be
diagnosed after the fact, including the navigation graph dump.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOGGER_NAME = "frame_slideshow"
CONSOLE_FORMAT = "%(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# requests logs every connection at DEBUG when fetching frame rasters.
QUIET_LOGGERS = ("urllib3",)


def _open_log_file(log_file: Union[str, Path]) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def configure_logging(verbose: bool = False, log_file: Union[str, Path, None] = None) -> logging.Logger:
    """Route log records to stdout (and optionally a file) and return the app logger."""
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    handlers: List[logging.Handler] = [console]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(_open_log_file(log_file))
        except OSError as exc:
            file_error = exc

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if file_error is not None:
        logger.warning("Cannot write log file %s, logging to console only: %s", log_file, file_error)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
