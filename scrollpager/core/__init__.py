"""Core pagination types and mode resolution."""

from .errors import (
    ConfigurationError,
    ErrorKind,
    FetchError,
    NoCursorError,
    ScrollPagerError,
)
from .modes import CursorPage, CursorSource, PageSource, PaginationMode, resolve_source
from .state import LoadKind, PaginationState, create_initial_state

__all__ = [
    "ConfigurationError",
    "CursorPage",
    "CursorSource",
    "ErrorKind",
    "FetchError",
    "LoadKind",
    "NoCursorError",
    "PageSource",
    "PaginationMode",
    "PaginationState",
    "ScrollPagerError",
    "create_initial_state",
    "resolve_source",
]
