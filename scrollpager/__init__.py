"""Paginated data-fetching engine for infinite scroll lists."""

from scrollpager.config import PaginationSettings, RetrySettings, ScrollSettings
from scrollpager.core import (
    ConfigurationError,
    CursorPage,
    CursorSource,
    PageSource,
    PaginationState,
)
from scrollpager.core.di_container import ScrollContainer
from scrollpager.managers import InfiniteScrollManager
from scrollpager.services import RetryPolicy

__all__ = [
    "ConfigurationError",
    "CursorPage",
    "CursorSource",
    "InfiniteScrollManager",
    "PageSource",
    "PaginationSettings",
    "PaginationState",
    "RetryPolicy",
    "RetrySettings",
    "ScrollContainer",
    "ScrollSettings",
]
