"""Pagination state record shared by the resolver, reducers and manager."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class LoadKind(Enum):
    INITIAL = "initial"
    MORE = "more"
    REFRESH = "refresh"


@dataclass(frozen=True)
class PaginationState(Generic[T]):
    """Immutable snapshot of a paginated list.

    items is always the concatenation of pages. Records are swapped
    wholesale, never mutated, so identity comparison is enough to tell
    whether a snapshot is still current.
    """

    items: Tuple[T, ...] = ()
    pages: Tuple[Tuple[T, ...], ...] = ()
    current_page: int = 0
    cursor: Optional[str] = None
    has_more: bool = True
    is_loading: bool = True
    is_loading_more: bool = False
    is_refreshing: bool = False
    error: Optional[str] = None
    total_items: Optional[int] = field(default=None)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def create_initial_state(
    initial_page: int = 0,
    total_items: Optional[int] = None,
    is_loading: bool = True,
) -> PaginationState:
    return PaginationState(
        items=(),
        pages=(),
        current_page=initial_page,
        cursor=None,
        has_more=True,
        is_loading=is_loading,
        is_loading_more=False,
        is_refreshing=False,
        error=None,
        total_items=total_items,
    )
