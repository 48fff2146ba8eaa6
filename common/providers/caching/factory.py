from typing import Optional

from common.core.telemetry import get_logger

from .interface import CacheInterface
from .memory_cache import MemoryCache

logger = get_logger(__name__)

# Global instance
_cache_provider: Optional[CacheInterface] = None


def get_cache_provider() -> CacheInterface:
    """
    Get the configured cache provider.

    Returns:
        CacheInterface: The cache provider instance
    """
    global _cache_provider

    if _cache_provider is None:
        # Sessions hold live state objects, so they must stay in process
        _cache_provider = MemoryCache()
        logger.info("Initialized memory cache provider")

    return _cache_provider
