"""State transitions for infinite scroll pagination."""

from dataclasses import replace
from typing import Any, Optional, Sequence

from scrollpager.core.state import LoadKind, PaginationState, create_initial_state


def reduce_start(state: PaginationState, kind: LoadKind) -> PaginationState:
    """Mark an operation of the given kind as running and clear the last error."""
    return replace(
        state,
        is_loading=kind is LoadKind.INITIAL,
        is_loading_more=kind is LoadKind.MORE,
        is_refreshing=kind is LoadKind.REFRESH,
        error=None,
    )


def reduce_initial_success(fresh: PaginationState) -> PaginationState:
    return replace(
        fresh,
        is_loading=False,
        is_loading_more=False,
        is_refreshing=False,
        error=None,
    )


def reduce_initial_failure(
    state: PaginationState,
    message: str,
    kind: LoadKind = LoadKind.INITIAL,
) -> PaginationState:
    """Keep already rendered items; only the flag of the failed kind is cleared."""
    if kind is LoadKind.REFRESH:
        return replace(state, is_refreshing=False, error=message)
    return replace(state, is_loading=False, error=message)


def reduce_load_more_success(
    state: PaginationState,
    chunk: Sequence[Any],
    current_page: int,
    cursor: Optional[str],
    has_more: bool,
) -> PaginationState:
    chunk = tuple(chunk)
    return replace(
        state,
        items=state.items + chunk,
        pages=state.pages + (chunk,),
        current_page=current_page,
        cursor=cursor,
        has_more=has_more,
        is_loading_more=False,
        error=None,
    )


def reduce_load_more_failure(state: PaginationState, message: str) -> PaginationState:
    return replace(state, is_loading_more=False, error=message)


def reduce_reset(initial_page: int, total_items: Optional[int] = None) -> PaginationState:
    # is_loading stays raised until the next initial load or refresh lands.
    return create_initial_state(initial_page, total_items)
