import asyncio
import time
from typing import Awaitable, Callable, Optional

from common.core.telemetry import get_logger

from .interface import RateLimiterInterface

logger = get_logger(__name__)


class FixedIntervalRateLimiter(RateLimiterInterface):
    """Grants at most one call per ``interval`` seconds, measured between grants."""

    def __init__(
        self,
        interval: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = interval
        self._sleep = sleep
        self._clock = clock
        self._last_grant: Optional[float] = None
        # Concurrent callers queue here and are granted one at a time
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            if self._last_grant is not None:
                wait = self.interval - (self._clock() - self._last_grant)
                if wait > 0:
                    logger.debug(f"Waiting {wait:.2f}s before next upload")
                    await self._sleep(wait)
            self._last_grant = self._clock()


class NoopRateLimiter(RateLimiterInterface):
    """Never waits."""

    async def acquire(self) -> None:
        return None
