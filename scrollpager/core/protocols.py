"""Protocol definitions for data sources."""

from typing import Any, Awaitable, Optional, Protocol, Sequence


class PageFetcher(Protocol):
    def __call__(self, page: int, page_size: int) -> Awaitable[Sequence[Any]]: ...


class CursorFetcher(Protocol):
    def __call__(self, cursor: Optional[str], page_size: int) -> Awaitable[Any]: ...


class PageDataSource(Protocol):
    def fetch_data(self, page: int, page_size: int) -> Awaitable[Sequence[Any]]: ...


class CursorDataSource(Protocol):
    pagination_mode: str

    def fetch_cursor(self, cursor: Optional[str], page_size: int) -> Awaitable[Any]: ...
