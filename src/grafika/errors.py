"""Error reporting.

Misuse of the public API is reported through :mod:`logging` and the call
returns ``None`` (or leaves state untouched) instead of raising, so a broken
UI never takes the host editor down with it.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """Categories of reported misuse."""

    INVALID_ARGUMENT = "invalid_argument"
    """A required parameter was missing (``None``)."""

    INVALID_SHAPE = "invalid_shape"
    """A component had the wrong number of rows for the operation."""

    CONFIGURATION_ERROR = "configuration_error"
    """A border or option value could not be understood."""


class SurfaceLockedError(RuntimeError):
    """Raised by :class:`~grafika.surface.MemorySurface` when written while read-only."""


def report(kind: ErrorKind, message: str) -> None:
    """Log a misuse report."""
    logger.error("grafika: [%s] %s", kind.value, message)


def expect_param(fn: str, param: str, value: Any) -> bool:
    """Report a missing required parameter.

    Returns ``True`` when *value* is present so callers can write
    ``if not expect_param(...): return None``.
    """
    if value is None:
        report(
            ErrorKind.INVALID_ARGUMENT,
            f"function `{fn}` expects a non-nil `{param}` parameter",
        )
        return False
    return True
