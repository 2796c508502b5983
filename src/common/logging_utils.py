"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``. This module owns
root handler setup and the structured ``extra=`` payload convention used for
DEBUG traces, so callers never format context by hand.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "revlib-root"


def _resolve_level(name: Optional[str]) -> int:
    """Map a level name to its numeric value, falling back to INFO."""
    if not name:
        return logging.INFO
    value = getattr(logging, str(name).strip().upper(), None)
    if isinstance(value, int):
        return value
    return logging.INFO


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root stream handler once and apply the requested level.

    Args:
        level: Explicit level name. When omitted the ``REVLIB_LOG_LEVEL``
            environment variable is consulted, then the default.
    """
    root = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)

    chosen = level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL
    root.setLevel(_resolve_level(chosen))


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra=`` mapping for a structured log record.

    ``None`` values are dropped so records only carry what is known.
    """
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self):
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed time so far (or total, once exited)."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
