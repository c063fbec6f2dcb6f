"""Manager classes for pagination state."""

from .infinite_scroll_manager import InfiniteScrollManager

__all__ = ["InfiniteScrollManager"]
