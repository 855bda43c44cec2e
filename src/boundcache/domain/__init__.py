"""Cache domain package."""

from boundcache.domain.entry import Entry
from boundcache.domain.enums import Direction, EvictionPolicy, OrderingField, StoreBacking
from boundcache.domain.stats import CacheStats
from boundcache.domain.store import IEntryStore

__all__ = [
    "Entry",
    "CacheStats",
    "IEntryStore",
    "EvictionPolicy",
    "StoreBacking",
    "OrderingField",
    "Direction",
]
