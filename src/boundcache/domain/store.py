"""
Entry store interface.

All store backings follow this contract. A store owns the mapping from key
to entry and answers ordered scans keyed by either timestamp field; it does
not lock, validate keys or enforce capacity. Those belong to the cache that
owns the store.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, TypeVar

from boundcache.domain.entry import Entry
from boundcache.domain.enums import Direction, OrderingField

V = TypeVar("V")


class IEntryStore(ABC, Generic[V]):
    """
    Keyed entry collection with timestamp-ordered queries.

    Tie-break: entries sharing a timestamp are ordered by their sequence
    number, so the earlier-inserted (or earlier-touched) entry is the
    minimum and the later one the maximum.
    """

    def __init__(self) -> None:
        self._sequence = itertools.count(1)

    def _next_seq(self) -> int:
        return next(self._sequence)

    @abstractmethod
    def count(self) -> int:
        """Number of live entries."""
        ...

    @abstractmethod
    def lookup(self, key: str) -> Entry[V] | None:
        """Return a copy of the entry for *key* without mutating it."""
        ...

    @abstractmethod
    def insert_or_replace(self, key: str, value: V, now: datetime) -> Entry[V]:
        """Drop any entry for *key*, then insert a fresh one stamped *now*."""
        ...

    @abstractmethod
    def touch(self, key: str, now: datetime) -> Entry[V] | None:
        """Set ``last_used_at`` of *key* to *now*. Returns a copy or None."""
        ...

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove *key* if present. Always returns True."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Destroy every entry."""
        ...

    @abstractmethod
    def extreme_by(self, field: OrderingField, direction: Direction) -> str | None:
        """Key of the min or max entry ranked by *field*, None when empty."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """Snapshot of live keys."""
        ...

    def evict(self, field: OrderingField, count: int) -> list[str]:
        """
        Remove up to *count* entries with the smallest *field* values.

        Stops early if the store empties.

        Returns:
            Removed keys, in eviction order
        """
        evicted: list[str] = []
        while len(evicted) < count:
            key = self.extreme_by(field, Direction.MIN)
            if key is None:
                break
            self.remove(key)
            evicted.append(key)
        return evicted

    def __len__(self) -> int:
        return self.count()
