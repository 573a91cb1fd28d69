"""Centralized logging helpers shared by all subcommands.

Log records go to stderr so that report output on stdout stays machine
readable. The level comes from the DEVKIT_LOG_LEVEL environment variable
unless the CLI overrides it afterwards.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "devkit-stderr"
_FILE_HANDLER_NAME = "devkit-file"


def _resolve_level(default: int = logging.INFO) -> int:
    """Map the DEVKIT_LOG_LEVEL environment variable to a logging level."""
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(log_file: Optional[str] = None) -> None:
    """Install the stderr handler (and optional file handler) on the root logger.

    Safe to call more than once; existing devkit handlers are replaced.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in (_HANDLER_NAME, _FILE_HANDLER_NAME):
            root.removeHandler(handler)

    formatter = logging.Formatter(Constants.LOG_FORMAT)

    stream = logging.StreamHandler(sys.stderr)
    stream.set_name(_HANDLER_NAME)
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER_NAME)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s " + Constants.LOG_FORMAT)
        )
        root.addHandler(file_handler)

    root.setLevel(_resolve_level())


def set_level(level_name: Optional[str]) -> None:
    """Apply a CLI-provided level name; unknown names leave the level unchanged."""
    if not level_name:
        return
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        logging.getLogger().setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload for structured log records.

    None values are dropped so records only carry fields that were set.
    """
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.monotonic()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.monotonic()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.monotonic()
        return int((end - self._start) * 1000)
