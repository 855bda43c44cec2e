"""Tests for the boundcache CLI."""

import logging

import pytest
import structlog
from typer.testing import CliRunner

import boundcache.application.cache as cache_module
from boundcache.cli.main import app


@pytest.fixture
def cli_runner():
    """Fixture providing Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def isolated_logging(monkeypatch):
    """Undo the global structlog/stdlib configuration a --debug run installs."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(cache_module, "logger", structlog.get_logger(cache_module.__name__))
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestVersionCommand:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestDemoCommand:
    def test_lru_demo(self, cli_runner):
        result = cli_runner.invoke(app, ["demo"])
        assert result.exit_code == 0
        assert "Inserted A, B, C, D" in result.stdout
        assert "value-E" in result.stdout

    @pytest.mark.parametrize("backing", ["flat", "indexed"])
    def test_fifo_demo(self, cli_runner, backing):
        result = cli_runner.invoke(app, ["demo", "--policy", "fifo", "--backing", backing])
        assert result.exit_code == 0
        assert "3/3 entries" in result.stdout

    def test_debug_prints_cache_traces(self, cli_runner, isolated_logging):
        result = cli_runner.invoke(app, ["demo", "--debug"])
        assert result.exit_code == 0
        assert "cache_initialized" in result.output
        assert "cache_evicted" in result.output

    def test_no_traces_without_debug(self, cli_runner):
        result = cli_runner.invoke(app, ["demo"])
        assert "cache_initialized" not in result.output

    def test_rejects_unknown_policy(self, cli_runner):
        result = cli_runner.invoke(app, ["demo", "--policy", "mru"])
        assert result.exit_code != 0


class TestBenchCommand:
    def test_bench(self, cli_runner):
        result = cli_runner.invoke(app, ["bench", "-c", "10", "-e", "2", "-n", "200"])
        assert result.exit_code == 0
        assert "LRU / indexed" in result.stdout

    def test_bench_invalid_config(self, cli_runner):
        result = cli_runner.invoke(app, ["bench", "-c", "2", "-e", "3"])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_bench_from_yaml(self, cli_runner, tmp_path):
        path = tmp_path / "cache.yaml"
        path.write_text("cache:\n  capacity: 16\n  evict_count: 4\n")
        result = cli_runner.invoke(app, ["bench", "--config", str(path), "-n", "100"])
        assert result.exit_code == 0
        assert "capacity 16" in result.stdout

    def test_bench_rejects_bad_key_space(self, cli_runner):
        result = cli_runner.invoke(app, ["bench", "-c", "10", "-n", "50", "--key-space=-1"])
        assert result.exit_code == 1
        assert "key_space" in result.stdout
