"""Async rate limiter for mutating Shopify calls."""

import asyncio
import time

from blogfixer.utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Spaces out calls so no more than `requests_per_second` start each second.

    A rate of 0 disables throttling.
    """

    def __init__(self, requests_per_second: float = 2.0) -> None:
        if requests_per_second < 0:
            raise ValueError("requests_per_second must not be negative")
        self.requests_per_second = requests_per_second
        self._min_interval = 1.0 / requests_per_second if requests_per_second else 0.0
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        """Minimum number of seconds between two acquisitions."""
        return self._min_interval

    async def acquire(self) -> None:
        """Wait until another call is allowed, then claim the slot."""
        if not self._min_interval:
            return

        async with self._lock:
            now = time.monotonic()
            if self._last_call is not None:
                wait_time = self._min_interval - (now - self._last_call)
                if wait_time > 0:
                    logger.debug("Throttling write", wait_seconds=round(wait_time, 3))
                    await asyncio.sleep(wait_time)
            self._last_call = time.monotonic()

    async def __aenter__(self) -> "RateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None
