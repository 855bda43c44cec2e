"""
Ordered-index entry store.

For large entry counts. Besides the key -> entry dict, the store keeps one
sorted index per timestamp field, so extremal queries read an end of an
index and batch eviction pops from its head instead of rescanning and
sorting every entry.

Index items are ``(timestamp, sequence, key)`` tuples. Sequences are unique
per store, so tuple comparison never falls through to the key and equal
timestamps keep insertion (or touch) order.
"""

from __future__ import annotations

from datetime import datetime
from typing import TypeVar

from sortedcontainers import SortedList

from boundcache.domain.entry import Entry
from boundcache.domain.enums import Direction, OrderingField
from boundcache.domain.store import IEntryStore

V = TypeVar("V")

IndexItem = tuple[datetime, int, str]


class IndexedStore(IEntryStore[V]):
    """Dict-backed store with a sorted index per timestamp field."""

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, Entry[V]] = {}
        self._indices: dict[OrderingField, SortedList] = {field: SortedList() for field in OrderingField}

    def count(self) -> int:
        return len(self._entries)

    def lookup(self, key: str) -> Entry[V] | None:
        entry = self._entries.get(key)
        return entry.copy() if entry is not None else None

    def insert_or_replace(self, key: str, value: V, now: datetime) -> Entry[V]:
        seq = self._next_seq()
        entry = Entry(
            key=key,
            value=value,
            created_at=now,
            last_used_at=now,
            insert_seq=seq,
            touch_seq=seq,
        )
        # Index items are built before anything is mutated.
        items = [(field, self._item(entry, field)) for field in OrderingField if entry.timestamp(field) is not None]

        self._drop(key)
        self._entries[key] = entry
        for field, item in items:
            self._indices[field].add(item)
        return entry.copy()

    def touch(self, key: str, now: datetime) -> Entry[V] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._index_discard(entry, OrderingField.LAST_USED_AT)
        entry.last_used_at = now
        entry.touch_seq = self._next_seq()
        self._index_add(entry, OrderingField.LAST_USED_AT)
        return entry.copy()

    def remove(self, key: str) -> bool:
        self._drop(key)
        return True

    def clear(self) -> None:
        self._entries = {}
        self._indices = {field: SortedList() for field in OrderingField}

    def extreme_by(self, field: OrderingField, direction: Direction) -> str | None:
        index = self._indices[field]
        if not index:
            return None
        item = index[0] if direction is Direction.MIN else index[-1]
        return item[2]

    def evict(self, field: OrderingField, count: int) -> list[str]:
        index = self._indices[field]
        evicted: list[str] = []
        while index and len(evicted) < count:
            key = index[0][2]
            self._drop(key)
            evicted.append(key)
        return evicted

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    # -- index maintenance -------------------------------------------------

    def _drop(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        for field in OrderingField:
            self._index_discard(entry, field)

    def _index_add(self, entry: Entry[V], field: OrderingField) -> None:
        # Entries without a timestamp stay out of the ordering queries.
        if entry.timestamp(field) is not None:
            self._indices[field].add(self._item(entry, field))

    def _index_discard(self, entry: Entry[V], field: OrderingField) -> None:
        if entry.timestamp(field) is not None:
            self._indices[field].discard(self._item(entry, field))

    @staticmethod
    def _item(entry: Entry[V], field: OrderingField) -> IndexItem:
        return (entry.timestamp(field), entry.sequence(field), entry.key)

    def __repr__(self) -> str:
        return f"IndexedStore(len={len(self._entries)})"
