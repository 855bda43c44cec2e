"""Benchmark workload runner - times a seeded read/write mix against each cache variant."""

import random
import time
from dataclasses import dataclass, field
from datetime import datetime

from boundcache.application.cache import Cache
from boundcache.domain.enums import EvictionPolicy, StoreBacking
from boundcache.shared.infrastructure.config import CacheConfig


@dataclass
class VariantEntry:
    policy: str
    backing: str
    duration_s: float
    operations: int
    hits: int
    misses: int
    evictions: int

    @property
    def ops_per_second(self) -> float:
        if self.duration_s <= 0:
            return 0.0
        return self.operations / self.duration_s

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


@dataclass
class BenchmarkReport:
    timestamp: str
    capacity: int
    evict_count: int
    operations: int
    key_space: int
    read_ratio: float
    seed: int
    variants: list[VariantEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "capacity": self.capacity,
            "evict_count": self.evict_count,
            "operations": self.operations,
            "key_space": self.key_space,
            "read_ratio": self.read_ratio,
            "seed": self.seed,
            "variants": [
                {
                    "policy": v.policy,
                    "backing": v.backing,
                    "duration_s": round(v.duration_s, 4),
                    "ops_per_second": round(v.ops_per_second, 1),
                    "hit_rate": round(v.hit_rate, 4),
                    "evictions": v.evictions,
                }
                for v in self.variants
            ],
        }


class BenchmarkCollector:
    """Runs the same workload against every policy/backing combination.

    Usage::

        collector = BenchmarkCollector(config, operations=10_000)
        report = collector.run()
    """

    def __init__(
        self,
        config: CacheConfig,
        *,
        operations: int = 10_000,
        key_space: int | None = None,
        read_ratio: float = 0.7,
        seed: int = 42,
    ) -> None:
        if operations < 1:
            raise ValueError(f"operations must be >= 1, got {operations}")
        if not 0.0 <= read_ratio <= 1.0:
            raise ValueError(f"read_ratio must be within [0, 1], got {read_ratio}")
        if key_space is not None and key_space < 1:
            raise ValueError(f"key_space must be >= 1, got {key_space}")
        self._config = config
        self._operations = operations
        self._key_space = key_space if key_space is not None else config.capacity * 2
        self._read_ratio = read_ratio
        self._seed = seed

    def workload(self) -> list[tuple[bool, str]]:
        """Deterministic ``(is_read, key)`` sequence shared by every variant."""
        rng = random.Random(self._seed)
        return [
            (rng.random() < self._read_ratio, f"k{rng.randrange(self._key_space)}")
            for _ in range(self._operations)
        ]

    def run(self) -> BenchmarkReport:
        ops = self.workload()
        report = BenchmarkReport(
            timestamp=datetime.now().isoformat(timespec="seconds"),
            capacity=self._config.capacity,
            evict_count=self._config.evict_count,
            operations=self._operations,
            key_space=self._key_space,
            read_ratio=self._read_ratio,
            seed=self._seed,
        )
        for policy in EvictionPolicy:
            for backing in StoreBacking:
                report.variants.append(self._run_variant(policy, backing, ops))
        return report

    def _run_variant(self, policy: EvictionPolicy, backing: StoreBacking, ops: list[tuple[bool, str]]) -> VariantEntry:
        config = self._config.model_copy(update={"policy": policy, "backing": backing, "debug_logging": False})
        cache: Cache[int] = Cache.from_config(config)

        start = time.perf_counter()
        for i, (is_read, key) in enumerate(ops):
            if is_read:
                cache.try_get(key)
            else:
                cache.add_replace(key, i)
        duration = time.perf_counter() - start

        stats = cache.get_stats()
        return VariantEntry(
            policy=policy.value,
            backing=backing.value,
            duration_s=duration,
            operations=len(ops),
            hits=stats.hits,
            misses=stats.misses,
            evictions=stats.evictions,
        )
