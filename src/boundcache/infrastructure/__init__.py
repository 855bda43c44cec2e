"""Entry store backings."""

from boundcache.infrastructure.flat_store import FlatStore
from boundcache.infrastructure.indexed_store import IndexedStore

__all__ = ["FlatStore", "IndexedStore"]
