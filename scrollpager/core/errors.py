"""Error types for the pagination engine."""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    FETCH_FAILED = "fetch_failed"
    NO_CURSOR = "no_cursor"
    CONFIGURATION = "configuration"


class ScrollPagerError(Exception):
    """Base exception carrying an ErrorKind"""

    kind = ErrorKind.FETCH_FAILED

    def __init__(self, message: str = "", kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class FetchError(ScrollPagerError):
    """Raised when a data source fails with something that is not an exception"""

    kind = ErrorKind.FETCH_FAILED

    def __init__(self, message: str = "", original: Any = None):
        super().__init__(message)
        self.original = original


class NoCursorError(ScrollPagerError):
    """Raised when a cursor-mode load-more is attempted without a cursor"""

    kind = ErrorKind.NO_CURSOR

    def __init__(self, message: str = "No cursor available"):
        super().__init__(message)


class ConfigurationError(ScrollPagerError):
    """Raised when a source configuration matches neither pagination mode"""

    kind = ErrorKind.CONFIGURATION


def normalize_error(value: Any) -> Exception:
    """Return value unchanged if it is an exception, else wrap it in a FetchError."""
    if isinstance(value, Exception):
        return value
    return FetchError(str(value), original=value)


def error_message(error: Any, fallback: str) -> str:
    """Human-readable message for state.error.

    Falls back when the exception carries no text (e.g. a bare TimeoutError()).
    """
    message = str(normalize_error(error)).strip()
    return message or fallback
