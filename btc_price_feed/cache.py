"""
Revalidating cache for the current BTC/EUR price.

Polls a fetcher while at least one subscription is open, deduplicates
requests that arrive within the dedup window, serves the last good value when
a refresh fails (stale-while-error) and never lets an older resolution
overwrite a newer one.

All state lives on one asyncio event loop. Callers await the shared
in-flight task through asyncio.shield, so a caller that is cancelled (a
closed subscription, a torn-down consumer) never cancels the resolution other
callers are waiting on.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from .core.errors import ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_REFRESH_INTERVAL_MS = 60_000
DEFAULT_DEDUPING_WINDOW_MS = 15_000


class RevalidatingCache(Generic[T]):
    """
    Stale-while-revalidate cache around an async fetcher.

    Only ProviderError counts as a failed resolution; anything else the
    fetcher raises propagates to the callers unchanged.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[T]],
        *,
        refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
        deduping_window_ms: int = DEFAULT_DEDUPING_WINDOW_MS,
        revalidate_on_focus: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if refresh_interval_ms <= 0:
            raise ValueError("refresh_interval_ms must be positive")
        if deduping_window_ms < 0:
            raise ValueError("deduping_window_ms must be >= 0")
        self._fetcher = fetcher
        self.refresh_interval_ms = refresh_interval_ms
        self.deduping_window_ms = deduping_window_ms
        self.revalidate_on_focus = revalidate_on_focus
        self._clock = clock

        self._value: Optional[T] = None
        self._error: Optional[ProviderError] = None
        self._task: Optional[asyncio.Task] = None
        self._task_started_at: Optional[float] = None
        self._issued_seq = 0
        self._committed_seq = 0
        self._subscribers = 0
        self._poll_task: Optional[asyncio.Task] = None

    # -- state -------------------------------------------------------------

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def error(self) -> Optional[ProviderError]:
        return self._error

    @property
    def is_in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_loading(self) -> bool:
        return self._value is None and self.is_in_flight

    @property
    def is_validating(self) -> bool:
        return self._value is not None and self.is_in_flight

    @property
    def is_error(self) -> bool:
        return self._error is not None and self._value is None

    @property
    def subscriber_count(self) -> int:
        return self._subscribers

    # -- resolution --------------------------------------------------------

    def _within_dedup_window(self) -> bool:
        if self._task is None or self._task_started_at is None:
            return False
        elapsed_ms = (self._clock() - self._task_started_at) * 1000.0
        return elapsed_ms < self.deduping_window_ms

    async def _resolve(self, seq: int) -> T:
        try:
            result = await self._fetcher()
        except ProviderError as exc:
            if seq > self._committed_seq:
                self._committed_seq = seq
                self._error = exc
                logger.warning("Price refresh #%d failed: %s", seq, exc)
            else:
                logger.debug("Discarding failure of superseded refresh #%d", seq)
            raise
        if seq > self._committed_seq:
            self._committed_seq = seq
            self._value = result
            self._error = None
        else:
            logger.debug("Discarding result of superseded refresh #%d", seq)
        return result

    async def revalidate(self) -> T:
        """
        Return the latest resolution, starting a new one unless the most
        recent started less than deduping_window_ms ago.

        Raises ProviderError when the (shared) resolution fails.
        """
        if self._within_dedup_window():
            logger.debug("Refresh deduplicated onto #%d", self._issued_seq)
        else:
            self._issued_seq += 1
            self._task_started_at = self._clock()
            self._task = asyncio.get_running_loop().create_task(self._resolve(self._issued_seq))
            # Every waiter may have been cancelled; mark the exception retrieved.
            self._task.add_done_callback(_consume_exception)
        assert self._task is not None
        return await asyncio.shield(self._task)

    async def on_focus(self) -> Optional[T]:
        """
        Consumer regained foreground: revalidate if revalidate_on_focus is set
        and at least one subscription is open.
        """
        if not self.revalidate_on_focus or self._subscribers == 0:
            return self._value
        try:
            return await self.revalidate()
        except ProviderError:
            return self._value

    # -- polling -----------------------------------------------------------

    async def _poll(self) -> None:
        interval_s = self.refresh_interval_ms / 1000.0
        while True:
            try:
                await self.revalidate()
            except ProviderError:
                logger.debug("Poll refresh failed; serving last known value")
            await asyncio.sleep(interval_s)

    def subscribe(self) -> "PriceSubscription[T]":
        """Open a subscription; polling runs while any subscription is open."""
        loop = asyncio.get_running_loop()
        self._subscribers += 1
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = loop.create_task(self._poll())
        return PriceSubscription(self)

    def _unsubscribe(self) -> None:
        self._subscribers = max(0, self._subscribers - 1)
        if self._subscribers == 0 and self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    async def aclose(self) -> None:
        """Stop polling and wait for the poll task to finish."""
        self._subscribers = 0
        task, self._poll_task = self._poll_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass


def _consume_exception(task: asyncio.Task) -> None:
    if not task.cancelled():
        task.exception()


class PriceSubscription(Generic[T]):
    """
    Consumer handle: { value, is_loading, is_validating, is_error, refresh() }.

    Usable as an async context manager; leaving the block closes it.
    """

    def __init__(self, cache: RevalidatingCache[T]) -> None:
        self._cache = cache
        self._closed = False

    @property
    def cache(self) -> RevalidatingCache[T]:
        return self._cache

    @property
    def value(self) -> Optional[T]:
        return self._cache.value

    @property
    def error(self) -> Optional[ProviderError]:
        return self._cache.error

    @property
    def is_loading(self) -> bool:
        return self._cache.is_loading

    @property
    def is_validating(self) -> bool:
        return self._cache.is_validating

    @property
    def is_error(self) -> bool:
        return self._cache.is_error

    @property
    def closed(self) -> bool:
        return self._closed

    async def refresh(self) -> Optional[T]:
        """
        Revalidate now, bypassing the poll timer but honoring the dedup window.

        Returns the resolved value, or the last good value if the refresh failed.
        """
        try:
            return await self._cache.revalidate()
        except ProviderError:
            return self._cache.value

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._cache._unsubscribe()

    async def __aenter__(self) -> "PriceSubscription[T]":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
