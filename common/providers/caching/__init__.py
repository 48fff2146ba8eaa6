from .interface import CacheInterface
from .factory import get_cache_provider
from .memory_cache import MemoryCache

__all__ = [
    "CacheInterface",
    "MemoryCache",
    "get_cache_provider",
]
