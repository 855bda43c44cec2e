"""
Domain exceptions for boundcache.

Follows the "Fail Fast" principle: invalid configuration and invalid keys
are rejected before any state changes. All cache errors inherit from
CacheError.
"""


class CacheError(Exception):
    """Base class for all cache exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(CacheError):
    """Raised when construction options are invalid (e.g. evict_count > capacity)."""

    pass


class InvalidKeyError(CacheError, ValueError):
    """Raised when a keyed operation receives an empty or non-string key."""

    pass


class KeyNotFoundError(CacheError, KeyError):
    """Raised by ``get`` when the key is not cached."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class CacheInternalError(CacheError):
    """Raised when scanning or mutating the store fails unexpectedly."""

    pass
