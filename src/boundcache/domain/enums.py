"""
Cache domain enums.

Defines eviction disciplines, store backings and the ordering vocabulary
shared by every store implementation.
"""

from enum import Enum


class EvictionPolicy(Enum):
    """
    Eviction discipline of a cache.

    The policy only selects which timestamp ranks entries for eviction.
    """

    FIFO = "fifo"  # Evict by insertion time, reads never reorder
    LRU = "lru"  # Evict by last successful read

    @property
    def ordering_field(self) -> "OrderingField":
        """Timestamp field used to rank entries for eviction."""
        if self is EvictionPolicy.FIFO:
            return OrderingField.CREATED_AT
        return OrderingField.LAST_USED_AT


class StoreBacking(Enum):
    """
    Entry collection backing a cache.
    """

    FLAT = "flat"  # Plain mapping, linear scans
    INDEXED = "indexed"  # Mapping plus ordered timestamp indices


class OrderingField(Enum):
    """Entry timestamp an ordering query ranks by."""

    CREATED_AT = "created_at"
    LAST_USED_AT = "last_used_at"


class Direction(Enum):
    """End of an ordering to report."""

    MIN = "min"
    MAX = "max"
