"""Tests for the guarded_operation decorator."""

import threading

import pytest

from boundcache.shared.domain.exceptions import CacheInternalError, KeyNotFoundError
from boundcache.shared.infrastructure.error_handler import guarded_operation


class Guarded:
    def __init__(self, sink=None):
        self._lock = threading.Lock()
        self._sink = sink
        self.seen_locked = None

    @guarded_operation(context_keys=["key"])
    def ok(self, key):
        self.seen_locked = self._lock.locked()
        return key.upper()

    @guarded_operation(context_keys=["key"])
    def missing(self, key):
        raise KeyNotFoundError(f"Key not found: {key}")

    @guarded_operation(log_level="warning", context_keys=["key", "absent"])
    def broken(self, key, value=None):
        raise ZeroDivisionError("division by zero")


class TestGuardedOperation:
    def test_runs_under_lock(self):
        obj = Guarded()
        assert obj.ok("a") == "A"
        assert obj.seen_locked is True
        assert not obj._lock.locked()

    def test_preserves_metadata(self):
        assert Guarded.ok.__name__ == "ok"

    def test_cache_errors_pass_through(self, sink):
        obj = Guarded(sink)
        with pytest.raises(KeyNotFoundError):
            obj.missing("x")
        assert sink.events == []
        assert not obj._lock.locked()

    def test_unexpected_errors_are_wrapped(self, sink):
        obj = Guarded(sink)
        with pytest.raises(CacheInternalError) as excinfo:
            obj.broken(key="k")
        assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
        assert excinfo.value.context == {"operation": "broken", "key": "k"}
        assert not obj._lock.locked()

    def test_unknown_log_level_falls_back_to_error(self, sink):
        obj = Guarded(sink)
        with pytest.raises(CacheInternalError):
            obj.broken("k")
        level, event, kw = sink.events[0]
        assert level == "error"
        assert event == "cache_operation_failed"
        assert kw["error_type"] == "ZeroDivisionError"

    def test_without_sink_uses_module_logger(self):
        obj = Guarded()
        with pytest.raises(CacheInternalError):
            obj.broken("k")
        assert not obj._lock.locked()
