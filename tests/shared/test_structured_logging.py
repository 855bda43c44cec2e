"""Tests for structlog configuration and the diagnostic sink protocol."""

import io
import logging

import structlog
from structlog.testing import capture_logs

from boundcache import Cache
from boundcache.shared.infrastructure.config import CacheSettings
from boundcache.shared.infrastructure.logging import DiagnosticSink, configure_logging, get_logger


class TestConfigureLogging:
    def setup_method(self):
        self._root_level = logging.getLogger().level

    def teardown_method(self):
        structlog.reset_defaults()
        logging.getLogger().setLevel(self._root_level)

    def test_production_renders_json(self):
        configure_logging(stream=io.StringIO(), config=CacheSettings(app_env="production"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self):
        configure_logging(stream=io.StringIO(), config=CacheSettings(app_env="development"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_level_defaults_to_settings(self):
        configure_logging(stream=io.StringIO(), config=CacheSettings(log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    def test_level_override(self):
        configure_logging(stream=io.StringIO(), config=CacheSettings(log_level="INFO"), level="debug")
        assert logging.getLogger().level == logging.DEBUG


class TestDiagnosticSink:
    def test_recording_sink_satisfies_protocol(self, sink):
        assert isinstance(sink, DiagnosticSink)

    def test_get_logger_exposes_sink_methods(self):
        logger = get_logger(__name__)
        assert callable(logger.debug)
        assert callable(logger.error)

    def test_default_sink_receives_traces(self):
        with capture_logs() as logs:
            cache = Cache(2, 1, True)
            cache.add_replace("a", 1)
        events = [log["event"] for log in logs]
        assert "cache_initialized" in events
        assert "cache_add_replace" in events
        add = next(log for log in logs if log["event"] == "cache_add_replace")
        assert add["key"] == "a"
        assert add["log_level"] == "debug"
