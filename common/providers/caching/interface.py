from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheInterface(ABC):
    """
    Key/value store with optional expiry.

    Backs the session registry, so values are live objects (a session and its
    local store) rather than serialized payloads.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Stored value, or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Store ``value`` under ``key``.

        Args:
            key: Cache key
            value: Any object; implementations must not copy it
            ttl: Seconds until expiry, None to keep until deleted
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Returns False if the key was not there."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def clear(self) -> bool:
        pass
