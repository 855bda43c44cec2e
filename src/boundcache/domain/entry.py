"""
Cache entry model.

An entry is the unit of storage: the cached value plus the two timestamps
eviction and ordering queries rank by. Sequence numbers break timestamp
ties so that rapid successive insertions keep a stable order even when the
clock resolution cannot tell them apart.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from boundcache.domain.enums import OrderingField

V = TypeVar("V")


@dataclass
class Entry(Generic[V]):
    """
    A single cached value.

    Attributes:
        key: Unique, non-empty key within its store
        value: Cached value
        created_at: Set once at insertion, never mutated
        last_used_at: Set at insertion, refreshed on every promoting read
        insert_seq: Store-wide sequence assigned at insertion
        touch_seq: Store-wide sequence assigned at insertion and every touch
    """

    key: str
    value: V
    created_at: datetime
    last_used_at: datetime
    insert_seq: int = 0
    touch_seq: int = 0

    def timestamp(self, field: OrderingField) -> datetime | None:
        """Return the timestamp selected by *field*."""
        if field is OrderingField.CREATED_AT:
            return self.created_at
        return self.last_used_at

    def sequence(self, field: OrderingField) -> int:
        """Return the tie-break sequence paired with *field*."""
        if field is OrderingField.CREATED_AT:
            return self.insert_seq
        return self.touch_seq

    def ordering_key(self, field: OrderingField) -> tuple[datetime, int]:
        """Sort key for *field*: timestamp first, then sequence."""
        return (self.timestamp(field), self.sequence(field))

    def copy(self) -> "Entry[V]":
        """Shallow copy detached from the store's internal collection."""
        return dataclasses.replace(self)
