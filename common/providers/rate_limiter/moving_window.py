import asyncio
import time
from typing import Awaitable, Callable

from limits import parse
from limits.aio.storage import MemoryStorage
from limits.aio.strategies import MovingWindowRateLimiter as LimitsMovingWindow

from common.core.telemetry import get_logger

from .interface import RateLimiterInterface

logger = get_logger(__name__)

# Smallest pause between retries when the window reports it is already open
MIN_RETRY_DELAY = 0.05


class MovingWindowRateLimiter(RateLimiterInterface):
    """
    Rate limiter backed by the ``limits`` moving window strategy.

    Accepts the same rate strings as the API limiter (e.g. ``"1/second"``,
    ``"30/minute"``), so upload pacing can be tuned without code changes.
    """

    def __init__(
        self,
        rate: str,
        key: str = "uploads",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.rate = rate
        self.key = key
        self._item = parse(rate)
        self._storage = MemoryStorage()
        self._strategy = LimitsMovingWindow(self._storage)
        self._sleep = sleep

    async def acquire(self) -> None:
        while not await self._strategy.hit(self._item, self.key):
            stats = await self._strategy.get_window_stats(self._item, self.key)
            delay = max(stats.reset_time - time.time(), MIN_RETRY_DELAY)
            logger.debug(f"Rate {self.rate} exhausted, retrying in {delay:.2f}s")
            await self._sleep(delay)
