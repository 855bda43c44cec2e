"""Centralized error handling decorator for cache operations."""

import functools
import inspect
from collections.abc import Callable
from typing import Any

import structlog

from boundcache.shared.domain.exceptions import CacheError, CacheInternalError

logger = structlog.get_logger(__name__)


def guarded_operation(
    log_level: str = "error",
    context_keys: list[str] | None = None,
):
    """
    Run a cache method under its instance lock with standardized error handling.

    The wrapped method's instance must expose ``_lock`` (a ``threading.Lock``)
    and may expose ``_sink`` (a diagnostic sink). The lock is held for the
    whole call and released on every exit path.

    Cache errors (invalid key, not found) propagate unchanged. Any other
    exception is recorded to the sink and re-raised as CacheInternalError,
    chained to the original.

    Args:
        log_level: Sink method used to record unexpected failures
        context_keys: Argument names copied into the failure record

    Example:
        ```python
        class Cache:
            @guarded_operation(context_keys=["key"])
            def remove(self, key):
                ...
        ```
    """

    def decorator(fn: Callable) -> Callable:
        signature = inspect.signature(fn)

        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            with self._lock:
                try:
                    return fn(self, *args, **kwargs)
                except CacheError:
                    raise
                except Exception as e:
                    log_ctx: dict[str, Any] = {}
                    if context_keys:
                        bound = signature.bind_partial(self, *args, **kwargs)
                        for key in context_keys:
                            if key in bound.arguments:
                                log_ctx[key] = bound.arguments[key]

                    sink = getattr(self, "_sink", None) or logger
                    log_method = getattr(sink, log_level, sink.error)
                    log_method(
                        "cache_operation_failed",
                        operation=fn.__name__,
                        error=str(e),
                        error_type=type(e).__name__,
                        **log_ctx,
                    )
                    raise CacheInternalError(
                        f"{fn.__qualname__} failed: {e}",
                        context={"operation": fn.__name__, **log_ctx},
                    ) from e

        return wrapper

    return decorator
