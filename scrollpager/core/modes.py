"""Pagination mode resolution: page-numbered vs cursor-based sources."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from scrollpager.core.errors import ConfigurationError, NoCursorError
from scrollpager.core.protocols import (
    CursorDataSource,
    CursorFetcher,
    PageDataSource,
    PageFetcher,
)
from scrollpager.core.state import PaginationState

logger = logging.getLogger("ScrollPager.Modes")


class PaginationMode(Enum):
    PAGE = "page"
    CURSOR = "cursor"


@dataclass(frozen=True)
class CursorPage:
    """One response from a cursor-based source."""

    items: Tuple[Any, ...]
    next_cursor: Optional[str] = None
    has_more: bool = False

    @classmethod
    def from_response(cls, response: Any) -> "CursorPage":
        """Normalize a fetch_cursor result.

        Accepts a CursorPage, a mapping with snake_case or camelCase keys,
        or any object with items and next_cursor/has_more attributes in either
        spelling.
        """
        if isinstance(response, CursorPage):
            return response

        if isinstance(response, Mapping):
            items = response.get("items", ())
            next_cursor = response.get("next_cursor", response.get("nextCursor"))
            has_more = response.get("has_more", response.get("hasMore", False))
        else:
            items = getattr(response, "items", ())
            next_cursor = getattr(response, "next_cursor", getattr(response, "nextCursor", None))
            has_more = getattr(response, "has_more", getattr(response, "hasMore", False))

        return cls(
            items=tuple(items or ()),
            next_cursor=next_cursor,
            has_more=bool(has_more),
        )


@dataclass(frozen=True)
class PageSource:
    fetch_data: PageFetcher

    mode = PaginationMode.PAGE


@dataclass(frozen=True)
class CursorSource:
    fetch_cursor: CursorFetcher

    mode = PaginationMode.CURSOR


Source = Union[PageSource, CursorSource]


@dataclass(frozen=True)
class LoadMoreResult:
    """Outcome of a single load-more fetch, before it is merged into state."""

    chunk: Tuple[Any, ...]
    current_page: int
    cursor: Optional[str]
    has_more: bool


def _lookup(config: Any, *names: str) -> Any:
    for name in names:
        if isinstance(config, Mapping):
            if name in config:
                return config[name]
        elif hasattr(config, name):
            return getattr(config, name)
    return None


def resolve_source(
    config: Union[Source, PageDataSource, CursorDataSource, Dict[str, Any]],
) -> Source:
    """Decide once which pagination mode a configuration describes.

    Raises ConfigurationError when the configuration matches neither shape.
    """
    if isinstance(config, (PageSource, CursorSource)):
        return config

    mode = _lookup(config, "pagination_mode", "paginationMode")
    fetch_cursor = _lookup(config, "fetch_cursor", "fetchCursor")
    fetch_data = _lookup(config, "fetch_data", "fetchData")

    if mode == PaginationMode.CURSOR.value or mode is PaginationMode.CURSOR:
        if not callable(fetch_cursor):
            raise ConfigurationError(
                "Cursor pagination requires a callable fetch_cursor"
            )
        return CursorSource(fetch_cursor=fetch_cursor)

    if mode not in (None, PaginationMode.PAGE.value, PaginationMode.PAGE):
        raise ConfigurationError(f"Unknown pagination mode: {mode!r}")

    if callable(fetch_data):
        return PageSource(fetch_data=fetch_data)

    if callable(fetch_cursor):
        raise ConfigurationError(
            "fetch_cursor given without pagination_mode='cursor'"
        )
    raise ConfigurationError(
        "Configuration provides neither fetch_data nor fetch_cursor"
    )


def is_cursor_mode(source: Source) -> bool:
    return source.mode is PaginationMode.CURSOR


def _cursor_has_more(page: CursorPage) -> bool:
    return page.has_more and page.next_cursor is not None


async def load_data(
    source: Source,
    page_or_cursor: Union[int, str, None],
    page_size: int,
    total_items: Optional[int] = None,
) -> PaginationState:
    """Fetch one chunk and build a fresh state from it."""
    if is_cursor_mode(source):
        page = CursorPage.from_response(
            await source.fetch_cursor(page_or_cursor, page_size)
        )
        return PaginationState(
            items=page.items,
            pages=(page.items,),
            current_page=0,
            cursor=page.next_cursor,
            has_more=_cursor_has_more(page),
            is_loading=False,
            is_loading_more=False,
            is_refreshing=False,
            error=None,
            total_items=total_items,
        )

    data = tuple(await source.fetch_data(page_or_cursor, page_size))
    return PaginationState(
        items=data,
        pages=(data,),
        current_page=page_or_cursor,
        cursor=None,
        has_more=len(data) >= page_size,
        is_loading=False,
        is_loading_more=False,
        is_refreshing=False,
        error=None,
        total_items=total_items,
    )


async def load_more_data(
    source: Source,
    state: PaginationState,
    page_size: int,
) -> LoadMoreResult:
    """Fetch the chunk following state; raises NoCursorError when there is none."""
    if is_cursor_mode(source):
        if state.cursor is None:
            raise NoCursorError()
        page = CursorPage.from_response(
            await source.fetch_cursor(state.cursor, page_size)
        )
        return LoadMoreResult(
            chunk=page.items,
            current_page=state.current_page,
            cursor=page.next_cursor,
            has_more=_cursor_has_more(page),
        )

    next_page = state.current_page + 1
    data = tuple(await source.fetch_data(next_page, page_size))
    logger.debug(f"Fetched page {next_page}: {len(data)} items")
    return LoadMoreResult(
        chunk=data,
        current_page=next_page,
        cursor=None,
        has_more=len(data) >= page_size,
    )


def first_position(source: Source, initial_page: int) -> Union[int, None]:
    """Where an initial load or refresh starts: initial_page, or no cursor."""
    if is_cursor_mode(source):
        return None
    return initial_page
