"""boundcache - capacity-bounded in-process FIFO/LRU caches."""

from boundcache.application.cache import (
    Cache,
    FIFOCache,
    IndexedFIFOCache,
    IndexedLRUCache,
    LRUCache,
    create_cache,
)
from boundcache.domain.entry import Entry
from boundcache.domain.enums import Direction, EvictionPolicy, OrderingField, StoreBacking
from boundcache.domain.stats import CacheStats
from boundcache.shared.domain.exceptions import (
    CacheError,
    CacheInternalError,
    ConfigurationError,
    InvalidKeyError,
    KeyNotFoundError,
)
from boundcache.shared.infrastructure.config import CacheConfig, CacheSettings

__version__ = "0.1.0"

__all__ = [
    "Cache",
    "LRUCache",
    "FIFOCache",
    "IndexedLRUCache",
    "IndexedFIFOCache",
    "create_cache",
    "Entry",
    "CacheStats",
    "EvictionPolicy",
    "StoreBacking",
    "OrderingField",
    "Direction",
    "CacheConfig",
    "CacheSettings",
    "CacheError",
    "ConfigurationError",
    "InvalidKeyError",
    "KeyNotFoundError",
    "CacheInternalError",
]
