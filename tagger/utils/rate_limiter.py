"""Per-provider request pacing.

Each provider instance owns one :class:`RateLimiter`.  Before every outbound
request the provider awaits :meth:`RateLimiter.wait`, which blocks until the
minimum interval since the previous request has elapsed.

The wait is an ordinary ``asyncio.sleep``, so cancelling the calling task
(or an enclosing ``asyncio.wait_for`` timing out) aborts it immediately and
the ``CancelledError`` / ``TimeoutError`` reaches the caller unchanged.  An
aborted wait does not count as a request: the timestamp only advances once
the wait has completed.

The timestamp is guarded by an ``asyncio.Lock`` so that several coroutines
sharing one provider are paced one after another instead of all reading the
same stale timestamp.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

from tagger.utils.logging import get_logger

_logger = get_logger(__name__)


class RateLimiter:
    """Enforces a minimum interval between consecutive requests.

    Parameters
    ----------
    min_interval:
        Seconds that must separate two requests (1.0 for MusicBrainz).
    clock:
        Monotonic time source; injectable for tests.
    sleep:
        Awaitable sleep function; injectable for tests.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def last_request_time(self) -> float | None:
        """Clock reading of the last completed wait, ``None`` before the first."""
        return self._last_request_time

    async def wait(self) -> None:
        """Block until the next request may be sent, then record it."""
        async with self._lock:
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < self._min_interval:
                    delay = self._min_interval - elapsed
                    _logger.debug("rate_limit_wait", delay=round(delay, 3))
                    await self._sleep(delay)
            self._last_request_time = self._clock()
