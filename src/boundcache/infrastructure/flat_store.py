"""
Flat entry store.

Entries live in a plain dict keyed by cache key. Point lookups are O(1);
ordering queries and eviction scan every live entry, which is fine for the
modest capacities this backing targets.
"""

from __future__ import annotations

import heapq
from datetime import datetime
from typing import Iterator, TypeVar

from boundcache.domain.entry import Entry
from boundcache.domain.enums import Direction, OrderingField
from boundcache.domain.store import IEntryStore

V = TypeVar("V")


class FlatStore(IEntryStore[V]):
    """Unordered dict-backed store with linear-scan ordering queries."""

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, Entry[V]] = {}

    def count(self) -> int:
        return len(self._entries)

    def lookup(self, key: str) -> Entry[V] | None:
        entry = self._entries.get(key)
        return entry.copy() if entry is not None else None

    def insert_or_replace(self, key: str, value: V, now: datetime) -> Entry[V]:
        # Replaced entries lose their timestamps; nothing is merged.
        self._entries.pop(key, None)
        seq = self._next_seq()
        entry = Entry(
            key=key,
            value=value,
            created_at=now,
            last_used_at=now,
            insert_seq=seq,
            touch_seq=seq,
        )
        self._entries[key] = entry
        return entry.copy()

    def touch(self, key: str, now: datetime) -> Entry[V] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        entry.last_used_at = now
        entry.touch_seq = self._next_seq()
        return entry.copy()

    def remove(self, key: str) -> bool:
        self._entries.pop(key, None)
        return True

    def clear(self) -> None:
        self._entries = {}

    def extreme_by(self, field: OrderingField, direction: Direction) -> str | None:
        candidates = list(self._ranked(field))
        if not candidates:
            return None

        pick = min if direction is Direction.MIN else max
        return pick(candidates, key=lambda e: e.ordering_key(field)).key

    def evict(self, field: OrderingField, count: int) -> list[str]:
        # One scan for the whole batch instead of one per evicted entry.
        victims = heapq.nsmallest(count, self._ranked(field), key=lambda e: e.ordering_key(field))
        for entry in victims:
            del self._entries[entry.key]
        return [entry.key for entry in victims]

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def _ranked(self, field: OrderingField) -> Iterator[Entry[V]]:
        """Live entries that carry a timestamp for *field*."""
        return (e for e in self._entries.values() if e.timestamp(field) is not None)

    def __repr__(self) -> str:
        return f"FlatStore(len={len(self._entries)})"
