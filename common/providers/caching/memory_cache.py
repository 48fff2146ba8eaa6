import time
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass

from .interface import CacheInterface
from common.core.telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Represents a cached entry with expiration."""

    value: Any
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        """Check if this entry has expired."""
        if self.expires_at is None:
            return False
        return now > self.expires_at


class MemoryCache(CacheInterface):
    """In-process cache; values are stored by reference, not copied."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._cache: Dict[str, CacheEntry] = {}
        self._clock = clock
        logger.info("Memory cache provider initialized")

    def _cleanup_expired(self) -> None:
        now = self._clock()
        expired_keys = [
            key for key, entry in self._cache.items() if entry.is_expired(now)
        ]
        for key in expired_keys:
            del self._cache[key]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")

    async def get(self, key: str) -> Optional[Any]:
        entry = self._cache.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._cache[key]
            return None

        return entry.value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        self._cleanup_expired()
        expires_at = self._clock() + ttl if ttl else None
        self._cache[key] = CacheEntry(value=value, expires_at=expires_at)
        logger.debug(f"Cached key {key} with TTL {ttl}")
        return True

    async def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            logger.debug(f"Deleted cache key {key}")
            return True
        return False

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def clear(self) -> bool:
        self._cache.clear()
        logger.info("Cleared all cache data")
        return True
