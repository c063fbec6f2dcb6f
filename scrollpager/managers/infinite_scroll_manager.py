"""Infinite Scroll Manager - Serializes loading, paging and refreshing of a list."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from scrollpager.config.settings import ScrollSettings
from scrollpager.core.errors import error_message
from scrollpager.core.modes import (
    first_position,
    is_cursor_mode,
    load_data,
    load_more_data,
    resolve_source,
)
from scrollpager.core.state import LoadKind, PaginationState, create_initial_state
from scrollpager.managers.pagination_state import (
    reduce_initial_failure,
    reduce_initial_success,
    reduce_load_more_failure,
    reduce_load_more_success,
    reduce_reset,
    reduce_start,
)
from scrollpager.services.retry import RetryPolicy

logger = logging.getLogger("ScrollPager.InfiniteScrollManager")

_FALLBACK_MESSAGES = {
    LoadKind.INITIAL: "Failed to load data",
    LoadKind.MORE: "Failed to load more items",
    LoadKind.REFRESH: "Failed to refresh data",
}


@dataclass(frozen=True, eq=False)
class _Operation:
    kind: LoadKind
    generation: int


class InfiniteScrollManager:
    """Owns the pagination state of one list and every fetch that feeds it.

    At most one operation runs at a time. An initial load or refresh
    supersedes whatever is running: the superseded operation's result is
    dropped whenever it arrives. After detach() no result is applied at all.
    """

    def __init__(
        self,
        source: Any,
        settings: Optional[ScrollSettings] = None,
        *,
        total_items: Optional[int] = None,
        retry_policy: Optional[RetryPolicy] = None,
        on_state_change: Optional[Callable[[PaginationState], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        """Initialize InfiniteScrollManager.

        Args:
            source: PageSource, CursorSource, or an object/mapping exposing
                fetch_data, or fetch_cursor with pagination_mode="cursor"
            settings: Pagination and retry settings (defaults if omitted)
            total_items: Optional total count hint, passed through untouched
            retry_policy: Overrides the policy built from settings.retry
            on_state_change: Called with every applied state
            on_error: Called with the message of every applied failure

        Raises:
            ConfigurationError: if source matches neither pagination mode
        """
        self.source = resolve_source(source)
        self.settings = settings or ScrollSettings()

        pagination = self.settings.pagination
        self.page_size = pagination.page_size
        self.auto_load = pagination.auto_load
        self.threshold = pagination.threshold
        self.initial_page = 0 if is_cursor_mode(self.source) else pagination.initial_page
        self.total_items = total_items

        self.retry_policy = retry_policy or RetryPolicy.from_settings(self.settings.retry)
        self.on_state_change = on_state_change
        self.on_error = on_error

        self._state: PaginationState = create_initial_state(
            self.initial_page, total_items, is_loading=self.auto_load
        )
        self._generation = 0
        self._active: Optional[_Operation] = None
        self._attached = True
        self._auto_loaded = False
        self._auto_load_task: Optional[asyncio.Task] = None

        mode = "cursor" if is_cursor_mode(self.source) else "page"
        logger.info(f"Initialized in {mode} mode (page_size={self.page_size})")

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------
    @property
    def state(self) -> PaginationState:
        return self._state

    @property
    def items(self) -> Tuple[Any, ...]:
        return self._state.items

    @property
    def can_load_more(self) -> bool:
        state = self._state
        return state.has_more and not state.is_loading_more and not state.is_loading

    @property
    def is_cursor_mode(self) -> bool:
        return is_cursor_mode(self.source)

    @property
    def is_attached(self) -> bool:
        return self._attached

    @property
    def in_flight(self) -> Optional[LoadKind]:
        return self._active.kind if self._active else None

    def get_pagination_state(self) -> Dict[str, Any]:
        """Pagination summary for status labels.

        Returns:
            dict: offset, total, has_more, loading, current_page, cursor, error
        """
        state = self._state
        return {
            "offset": state.item_count,
            "total": state.total_items,
            "has_more": state.has_more,
            "loading": self._active is not None,
            "current_page": state.current_page,
            "cursor": state.cursor,
            "error": state.error,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def attach(self) -> Optional[asyncio.Task]:
        """Mark the owner as live and schedule the automatic initial load.

        The automatic load runs at most once per manager. Must be called
        from inside a running event loop when auto_load is enabled.
        """
        self._attached = True
        if self.auto_load and not self._auto_loaded:
            self._auto_loaded = True
            self._auto_load_task = asyncio.get_running_loop().create_task(
                self.load_initial()
            )
            return self._auto_load_task
        return None

    def detach(self) -> None:
        """Tear down: results of anything still running are discarded."""
        self._attached = False
        self._generation += 1
        self._active = None
        logger.debug("Detached; pending results will be discarded")

    async def __aenter__(self) -> "InfiniteScrollManager":
        self.attach()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.detach()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def load_initial(self) -> None:
        """Load the first page (or first cursor chunk), replacing the list."""
        await self._load_first_chunk(LoadKind.INITIAL)

    async def refresh(self) -> None:
        """Reload from the first page; current items stay visible until it lands."""
        await self._load_first_chunk(LoadKind.REFRESH)

    async def load_more(self) -> bool:
        """Append the next page or cursor chunk.

        Returns:
            True if a fetch was started, False if the call was gated
        """
        state = self._state
        if not self._attached:
            logger.debug("load_more ignored: detached")
            return False
        if self._active is not None:
            logger.debug(f"load_more ignored: {self._active.kind.value} in flight")
            return False
        if not state.has_more or state.is_loading_more or state.is_loading:
            logger.debug("load_more ignored: nothing more to load or already loading")
            return False
        if self.is_cursor_mode and state.cursor is None:
            logger.debug("load_more ignored: no cursor")
            return False
        if not state.pages:
            logger.debug("load_more ignored: no page loaded yet")
            return False

        op = self._begin(LoadKind.MORE)
        snapshot = self._state
        start_time = time.monotonic()

        try:
            result = await self.retry_policy.run(
                lambda: load_more_data(self.source, snapshot, self.page_size),
                should_retry=lambda: self._is_current(op),
            )
        except Exception as e:
            if not self._is_current(op):
                self._log_discard(op)
                return True
            message = error_message(e, _FALLBACK_MESSAGES[LoadKind.MORE])
            self._set_state(reduce_load_more_failure(self._state, message))
            logger.warning(f"Load more failed: {message}")
            self._notify_error(message)
        else:
            if not self._is_current(op):
                self._log_discard(op)
                return True
            self._set_state(
                reduce_load_more_success(
                    self._state,
                    result.chunk,
                    result.current_page,
                    result.cursor,
                    result.has_more,
                )
            )
            duration_ms = (time.monotonic() - start_time) * 1000
            logger.info(
                f"Load more completed in {duration_ms:.2f}ms. "
                f"Loaded {len(result.chunk)} items ({self._state.item_count} total)"
            )
        finally:
            self._release(op)
        return True

    async def load_more_if_needed(self, remaining_items: int) -> bool:
        """Scroll hook: load more once fewer than threshold items remain below the viewport.

        Returns:
            True if a load-more was started
        """
        if remaining_items > self.threshold or not self.can_load_more:
            return False
        logger.debug(f"{remaining_items} items left before end of list, loading more...")
        return await self.load_more()

    def reset(self) -> None:
        """Discard in-flight work and return to the initial empty state."""
        self._generation += 1
        self._active = None
        self._set_state(reduce_reset(self.initial_page, self.total_items))
        logger.info("State reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _load_first_chunk(self, kind: LoadKind) -> None:
        if not self._attached:
            logger.debug(f"{kind.value} ignored: detached")
            return
        if self._active is not None and self._active.kind is kind:
            logger.debug(f"{kind.value} ignored: already in flight")
            return

        op = self._begin(kind)
        position = first_position(self.source, self.initial_page)
        start_time = time.monotonic()

        try:
            fresh = await self.retry_policy.run(
                lambda: load_data(self.source, position, self.page_size, self.total_items),
                should_retry=lambda: self._is_current(op),
            )
        except Exception as e:
            if not self._is_current(op):
                self._log_discard(op)
                return
            message = error_message(e, _FALLBACK_MESSAGES[kind])
            self._set_state(reduce_initial_failure(self._state, message, kind))
            logger.warning(f"{kind.value.capitalize()} load failed: {message}")
            self._notify_error(message)
        else:
            if not self._is_current(op):
                self._log_discard(op)
                return
            self._set_state(reduce_initial_success(fresh))
            duration_ms = (time.monotonic() - start_time) * 1000
            logger.info(
                f"{kind.value.capitalize()} load completed in {duration_ms:.2f}ms. "
                f"Loaded {fresh.item_count} items"
            )
        finally:
            self._release(op)

    def _begin(self, kind: LoadKind) -> _Operation:
        if kind is not LoadKind.MORE:
            if self._active is not None:
                logger.info(f"{kind.value} supersedes in-flight {self._active.kind.value}")
            self._generation += 1
        op = _Operation(kind=kind, generation=self._generation)
        self._active = op
        self._set_state(reduce_start(self._state, kind))
        return op

    def _is_current(self, op: _Operation) -> bool:
        return self._attached and op.generation == self._generation

    def _release(self, op: _Operation) -> None:
        if self._active is op:
            self._active = None

    def _log_discard(self, op: _Operation) -> None:
        reason = "superseded" if self._attached else "detached"
        logger.debug(f"Discarding {op.kind.value} result ({reason})")

    def _set_state(self, state: PaginationState) -> None:
        self._state = state
        if self.on_state_change and self._attached:
            try:
                self.on_state_change(state)
            except Exception as e:
                logger.error(f"Error in state change callback: {e}")

    def _notify_error(self, message: str) -> None:
        if self.on_error:
            try:
                self.on_error(message)
            except Exception as e:
                logger.error(f"Error in error callback: {e}")
