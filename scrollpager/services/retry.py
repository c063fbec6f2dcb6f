"""Retry with exponential backoff for async operations."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from scrollpager.core.errors import normalize_error

logger = logging.getLogger("ScrollPager.Retry")

T = TypeVar("T")


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_retries: int,
    base_delay_ms: int,
    *,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    should_retry: Optional[Callable[[], bool]] = None,
) -> T:
    """Run operation, retrying up to max_retries times.

    The first attempt runs immediately; retry n (from 0) waits
    base_delay_ms * 2**n milliseconds. The last failure is re-raised once
    attempts are exhausted, or as soon as should_retry() returns False.

    Args:
        operation: Zero-argument coroutine factory
        max_retries: Retries after the first attempt (>= 0)
        base_delay_ms: Delay before the first retry, in milliseconds
        sleep: Awaitable sleep taking seconds
        should_retry: Optional check made before every retry
    """
    if max_retries < 0:
        raise ValueError("max_retries must be >= 0")

    last_error: Optional[Exception] = None

    for attempt in range(max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = normalize_error(e)

            if attempt >= max_retries:
                break
            if should_retry is not None and not should_retry():
                logger.debug(f"Retry abandoned after attempt {attempt + 1}")
                break

            delay_ms = base_delay_ms * (2 ** attempt)
            logger.warning(
                f"Attempt {attempt + 1}/{max_retries + 1} failed: {e!r}. "
                f"Retrying in {delay_ms}ms..."
            )
            await sleep(delay_ms / 1000)

    raise last_error


class RetryPolicy:
    """Reusable retry configuration; holds no per-call state."""

    def __init__(
        self,
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def from_settings(cls, settings, sleep=None) -> "RetryPolicy":
        return cls(
            max_retries=settings.max_retries,
            base_delay_ms=settings.retry_delay_ms,
            sleep=sleep,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delays_ms(self) -> list:
        """Backoff schedule, one entry per retry."""
        return [self.base_delay_ms * (2 ** i) for i in range(self.max_retries)]

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        should_retry: Optional[Callable[[], bool]] = None,
    ) -> T:
        return await retry_with_backoff(
            operation,
            self.max_retries,
            self.base_delay_ms,
            sleep=self._sleep,
            should_retry=should_retry,
        )

    def __repr__(self) -> str:
        return f"RetryPolicy(max_retries={self.max_retries}, base_delay_ms={self.base_delay_ms})"
