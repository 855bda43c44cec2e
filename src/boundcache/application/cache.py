"""
Thread-safe capacity-bounded cache.

Composes an entry store, an eviction policy and a per-instance lock into
the public cache API. Every read through ``get``/``try_get`` refreshes the
entry's ``last_used_at``; under the LRU policy that promotes the entry away
from eviction, under FIFO eviction order ignores it.

When an insertion finds the cache full, a whole batch of ``evict_count``
entries with the smallest ordering key is removed before the new entry is
added.
"""

from __future__ import annotations

import dataclasses
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

from boundcache.domain.entry import Entry
from boundcache.domain.enums import Direction, EvictionPolicy, OrderingField, StoreBacking
from boundcache.domain.stats import CacheStats
from boundcache.domain.store import IEntryStore
from boundcache.infrastructure.flat_store import FlatStore
from boundcache.infrastructure.indexed_store import IndexedStore
from boundcache.shared.domain.exceptions import InvalidKeyError, KeyNotFoundError
from boundcache.shared.infrastructure.config import CacheConfig
from boundcache.shared.infrastructure.error_handler import guarded_operation
from boundcache.shared.infrastructure.logging import DiagnosticSink, get_logger

logger = get_logger(__name__)

V = TypeVar("V")

Clock = Callable[[], datetime]

_STORE_TYPES: dict[StoreBacking, type[IEntryStore]] = {
    StoreBacking.FLAT: FlatStore,
    StoreBacking.INDEXED: IndexedStore,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Cache(Generic[V]):
    """
    A bounded, thread-safe cache keyed by non-empty strings.

    Parameters
    ----------
    capacity : int
        Maximum number of live entries. Must be >= evict_count.
    evict_count : int
        Entries removed per eviction batch. Must be >= 1.
    debug_logging : bool
        Trace every operation to the diagnostic sink.
    policy : EvictionPolicy | str, optional
        ``lru`` or ``fifo``. Defaults to the class's ``default_policy``.
    backing : StoreBacking | str, optional
        ``flat`` or ``indexed``. Defaults to the class's ``default_backing``.
    sink : DiagnosticSink, optional
        Where traces and failures are recorded. Defaults to this module's
        structlog logger.
    clock : callable, optional
        Returns the current time. Defaults to UTC wall-clock time. Stamps
        issued by one cache never decrease, so a clock stepping backwards
        cannot make a just-promoted entry the next LRU victim.

    Raises
    ------
    ConfigurationError
        If the options violate ``0 < evict_count <= capacity``.

    Examples
    --------
    >>> cache = Cache(capacity=3, evict_count=1)
    >>> for key in ("a", "b", "c", "d"):
    ...     cache.add_replace(key, key.upper())
    True
    True
    True
    True
    >>> cache.count()
    3
    >>> cache.oldest()
    'b'
    """

    default_policy: EvictionPolicy = EvictionPolicy.LRU
    default_backing: StoreBacking = StoreBacking.FLAT

    def __init__(
        self,
        capacity: int,
        evict_count: int = 1,
        debug_logging: bool = False,
        *,
        policy: EvictionPolicy | str | None = None,
        backing: StoreBacking | str | None = None,
        sink: DiagnosticSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = CacheConfig.build(
            capacity=capacity,
            evict_count=evict_count,
            debug_logging=debug_logging,
            policy=policy if policy is not None else self.default_policy,
            backing=backing if backing is not None else self.default_backing,
        )
        self._sink: DiagnosticSink = sink if sink is not None else logger
        self._clock: Clock = clock or utc_now
        self._last_stamp: datetime | None = None
        self._store: IEntryStore[V] = _STORE_TYPES[self._config.backing]()
        self._stats = CacheStats()
        # One lock per instance; unrelated caches never contend.
        self._lock = threading.Lock()

        self._trace(
            "cache_initialized",
            capacity=self._config.capacity,
            evict_count=self._config.evict_count,
            policy=self._config.policy.value,
            backing=self._config.backing.value,
        )

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        *,
        sink: DiagnosticSink | None = None,
        clock: Clock | None = None,
    ) -> "Cache[V]":
        """Build a cache from a validated :class:`CacheConfig`."""
        return cls(
            config.capacity,
            config.evict_count,
            config.debug_logging,
            policy=config.policy,
            backing=config.backing,
            sink=sink,
            clock=clock,
        )

    # -- configuration -----------------------------------------------------

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def capacity(self) -> int:
        return self._config.capacity

    @property
    def evict_count(self) -> int:
        return self._config.evict_count

    @property
    def policy(self) -> EvictionPolicy:
        return self._config.policy

    @property
    def backing(self) -> StoreBacking:
        return self._config.backing

    @property
    def debug_logging(self) -> bool:
        return self._config.debug_logging

    # -- size & ordering ---------------------------------------------------

    @guarded_operation()
    def count(self) -> int:
        """Return the number of live entries."""
        count = self._store.count()
        self._trace("cache_count", count=count)
        return count

    @guarded_operation()
    def oldest(self) -> str | None:
        """Key of the entry with the earliest ``created_at``, or None when empty."""
        return self._extreme("cache_oldest", OrderingField.CREATED_AT, Direction.MIN)

    @guarded_operation()
    def newest(self) -> str | None:
        """Key of the entry with the latest ``created_at``, or None when empty."""
        return self._extreme("cache_newest", OrderingField.CREATED_AT, Direction.MAX)

    @guarded_operation()
    def first_used(self) -> str | None:
        """Key of the entry with the earliest ``last_used_at``, or None when empty."""
        return self._extreme("cache_first_used", OrderingField.LAST_USED_AT, Direction.MIN)

    @guarded_operation()
    def last_used(self) -> str | None:
        """Key of the entry with the latest ``last_used_at``, or None when empty."""
        return self._extreme("cache_last_used", OrderingField.LAST_USED_AT, Direction.MAX)

    # -- reads -------------------------------------------------------------

    @guarded_operation(context_keys=["key"])
    def get(self, key: str) -> V:
        """
        Return the value for *key*, refreshing its ``last_used_at``.

        Raises:
            InvalidKeyError: If *key* is empty or not a string
            KeyNotFoundError: If *key* is not cached
        """
        entry = self._read(key)
        if entry is None:
            raise KeyNotFoundError(f"Key not found: {key}", context={"key": key})
        return entry.value

    @guarded_operation(context_keys=["key"])
    def try_get(self, key: str) -> tuple[bool, V | None]:
        """
        Non-throwing form of :meth:`get`.

        Returns:
            ``(True, value)`` on hit, ``(False, None)`` on miss
        """
        entry = self._read(key)
        if entry is None:
            return False, None
        return True, entry.value

    @guarded_operation(context_keys=["key"])
    def peek(self, key: str) -> V | None:
        """Return the value for *key* without promoting it, or None."""
        _validate_key(key)
        entry = self._store.lookup(key)
        return entry.value if entry is not None else None

    @guarded_operation(context_keys=["key"])
    def contains(self, key: str) -> bool:
        """Check membership without promoting."""
        _validate_key(key)
        return self._store.lookup(key) is not None

    @guarded_operation()
    def keys(self) -> list[str]:
        """Snapshot of live keys (no promotion)."""
        return self._store.keys()

    # -- writes ------------------------------------------------------------

    @guarded_operation(context_keys=["key"])
    def add_replace(self, key: str, value: V) -> bool:
        """
        Insert *value* under *key*, replacing any existing entry.

        A stale entry for *key* is removed before the capacity check, so a
        same-key replace never evicts other keys. The new entry gets fresh
        ``created_at`` and ``last_used_at`` timestamps.

        Returns:
            True once the entry is stored

        Raises:
            InvalidKeyError: If *key* is empty or not a string
        """
        _validate_key(key)
        now = self._now()

        replacing = self._store.lookup(key) is not None
        if replacing:
            self._store.remove(key)

        if self._store.count() >= self._config.capacity:
            evicted = self._store.evict(self._config.policy.ordering_field, self._config.evict_count)
            self._stats.evictions += len(evicted)
            self._trace("cache_evicted", evicted=evicted, count=len(evicted))

        self._store.insert_or_replace(key, value, now)
        if replacing:
            self._stats.replacements += 1
        else:
            self._stats.insertions += 1

        self._trace("cache_add_replace", key=key, replaced=replacing, count=self._store.count())
        return True

    @guarded_operation(context_keys=["key"])
    def remove(self, key: str) -> bool:
        """
        Remove *key* if cached.

        Idempotent: a missing key is not an error.

        Returns:
            Always True

        Raises:
            InvalidKeyError: If *key* is empty or not a string
        """
        _validate_key(key)
        if self._store.lookup(key) is not None:
            self._store.remove(key)
            self._stats.removals += 1
            self._trace("cache_removed", key=key)
        return True

    @guarded_operation()
    def clear(self) -> None:
        """Remove all entries. Capacity settings and statistics are kept."""
        self._store.clear()
        self._trace("cache_cleared")

    # -- statistics --------------------------------------------------------

    @guarded_operation()
    def get_stats(self) -> CacheStats:
        """Return a snapshot of the operation counters."""
        return dataclasses.replace(self._stats)

    @guarded_operation()
    def reset_stats(self) -> None:
        self._stats = CacheStats()

    # -- internals (caller holds the lock) ---------------------------------

    def _read(self, key: str) -> Entry[V] | None:
        _validate_key(key)
        entry = self._store.touch(key, self._now())
        if entry is None:
            self._stats.misses += 1
            self._trace("cache_get_miss", key=key)
            return None
        self._stats.hits += 1
        self._trace("cache_get_hit", key=key, last_used_at=entry.last_used_at.isoformat())
        return entry

    def _now(self) -> datetime:
        """Current time, never earlier than the previous stamp this cache issued."""
        now = self._clock()
        if self._last_stamp is not None and now < self._last_stamp:
            now = self._last_stamp
        self._last_stamp = now
        return now

    def _extreme(self, event: str, field: OrderingField, direction: Direction) -> str | None:
        key = self._store.extreme_by(field, direction)
        self._trace(event, key=key)
        return key

    def _trace(self, event: str, **kw: Any) -> None:
        if self._config.debug_logging and self._sink is not None:
            self._sink.debug(event, **kw)

    # -- dunder ------------------------------------------------------------

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str) or not key:
            return False
        return self.contains(key)

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"{type(self).__name__}(capacity={self._config.capacity}, "
                f"evict_count={self._config.evict_count}, "
                f"policy={self._config.policy.value}, backing={self._config.backing.value}, "
                f"len={self._store.count()})"
            )


class LRUCache(Cache[V]):
    """Least-recently-used cache on the flat backing."""

    default_policy = EvictionPolicy.LRU
    default_backing = StoreBacking.FLAT


class FIFOCache(Cache[V]):
    """First-in-first-out cache on the flat backing."""

    default_policy = EvictionPolicy.FIFO
    default_backing = StoreBacking.FLAT


class IndexedLRUCache(Cache[V]):
    """Least-recently-used cache on the ordered-index backing, for large capacities."""

    default_policy = EvictionPolicy.LRU
    default_backing = StoreBacking.INDEXED


class IndexedFIFOCache(Cache[V]):
    """First-in-first-out cache on the ordered-index backing, for large capacities."""

    default_policy = EvictionPolicy.FIFO
    default_backing = StoreBacking.INDEXED


def create_cache(
    config: CacheConfig,
    *,
    sink: DiagnosticSink | None = None,
    clock: Clock | None = None,
) -> Cache[Any]:
    """Build a cache for *config*."""
    return Cache.from_config(config, sink=sink, clock=clock)


def _validate_key(key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(f"Cache key must be a non-empty string, got {key!r}", context={"key": key})
