"""Cache subsystem — one sanitized document on disk with a staleness window."""

from edtexport.cache.entry import CacheEntry
from edtexport.cache.store import FileCacheStore

__all__ = ["CacheEntry", "FileCacheStore"]
