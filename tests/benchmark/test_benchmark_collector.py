"""Tests for the benchmark workload runner and reporter."""

from io import StringIO

import pytest
from rich.console import Console

from boundcache.benchmark import BenchmarkCollector, BenchmarkReporter, VariantEntry
from boundcache.shared.infrastructure.config import CacheConfig


@pytest.fixture
def config():
    return CacheConfig(capacity=20, evict_count=2)


class TestBenchmarkCollector:
    def test_workload_is_deterministic(self, config):
        a = BenchmarkCollector(config, operations=50, seed=7).workload()
        b = BenchmarkCollector(config, operations=50, seed=7).workload()
        assert a == b
        assert len(a) == 50

    def test_key_space_defaults_to_twice_capacity(self, config):
        ops = BenchmarkCollector(config, operations=500).workload()
        assert all(0 <= int(key[1:]) < 40 for _, key in ops)

    def test_runs_every_variant(self, config):
        report = BenchmarkCollector(config, operations=300).run()
        combos = {(v.policy, v.backing) for v in report.variants}
        assert combos == {("fifo", "flat"), ("fifo", "indexed"), ("lru", "flat"), ("lru", "indexed")}
        for v in report.variants:
            assert v.operations == 300
            assert v.evictions % 2 == 0

    def test_backings_agree_on_outcome(self, config):
        report = BenchmarkCollector(config, operations=400, key_space=60).run()
        by_policy: dict[str, set] = {}
        for v in report.variants:
            by_policy.setdefault(v.policy, set()).add((v.hits, v.misses, v.evictions))
        assert all(len(outcomes) == 1 for outcomes in by_policy.values())

    def test_to_dict(self, config):
        data = BenchmarkCollector(config, operations=20).run().to_dict()
        assert data["capacity"] == 20
        assert len(data["variants"]) == 4
        assert "ops_per_second" in data["variants"][0]

    @pytest.mark.parametrize(
        "kwargs", [{"operations": 0}, {"read_ratio": 1.5}, {"key_space": 0}, {"key_space": -3}]
    )
    def test_rejects_bad_parameters(self, config, kwargs):
        with pytest.raises(ValueError):
            BenchmarkCollector(config, **kwargs)


class TestVariantEntry:
    def test_zero_duration(self):
        entry = VariantEntry("lru", "flat", 0.0, 10, 0, 0, 0)
        assert entry.ops_per_second == 0.0
        assert entry.hit_rate == 0.0


class TestBenchmarkReporter:
    def test_display(self, config):
        report = BenchmarkCollector(config, operations=50).run()
        buffer = StringIO()
        BenchmarkReporter.display(report, console=Console(file=buffer, width=120))
        output = buffer.getvalue()
        assert "Cache Benchmark" in output
        assert "LRU / indexed" in output
        assert "FIFO / flat" in output


class TestBenchmarkKeySpace:
    def test_explicit_key_space(self, config):
        ops = BenchmarkCollector(config, operations=200, key_space=1).workload()
        assert {key for _, key in ops} == {"k0"}
