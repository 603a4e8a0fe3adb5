"""Minimum-interval throttle for a rate-limited provider.

MusicBrainz allows one request per second per client.  A directory lookup
makes two sequential requests (search, then detail), so the detail fetch
is wrapped in :meth:`RateLimitedCaller.call`, which waits until
``min_interval`` has passed since the last request recorded on the same
instance.  The search request itself is only recorded (:meth:`touch`), not
delayed.

The wait is an ``asyncio.sleep`` so the event loop keeps serving other
coroutines.  Concurrent callers queue on an ``asyncio.Lock``.  Nothing is
retried here: whatever the wrapped call raises propagates unchanged.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

logger = structlog.get_logger(logger_name=__name__)

T = TypeVar("T")

DEFAULT_MIN_INTERVAL = 1.1  # seconds


class RateLimitedCaller:
    """Enforce a minimum delay between requests to one provider.

    Parameters
    ----------
    min_interval:
        Seconds that must separate two recorded requests.
    clock:
        Monotonic time source.  Injectable for tests.
    sleep:
        Awaitable sleep function.  Injectable for tests.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    def touch(self) -> None:
        """Record a request that was made without waiting."""
        self._last_request_time = self._clock()

    async def wait(self) -> None:
        """Sleep until ``min_interval`` has elapsed since the last request."""
        if self._last_request_time is None:
            return
        remaining = self._min_interval - (self._clock() - self._last_request_time)
        if remaining > 0:
            logger.debug("rate_limit_wait", seconds=round(remaining, 3))
            await self._sleep(remaining)

    async def call(self, func: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
        """Wait for the interval, then await ``func(*args, **kwargs)``.

        The request time is recorded before the wrapped call starts, so a
        failing call still counts against the limit.  The lock covers the
        wait and the record, so concurrent callers are spaced one after
        another; the wrapped calls themselves run outside it.
        """
        async with self._lock:
            await self.wait()
            self.touch()
        return await func(*args, **kwargs)
