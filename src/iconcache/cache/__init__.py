"""Content-addressed file store keyed by image hash."""

from iconcache.cache.keys import content_key, hash_image, transparent_key
from iconcache.cache.locks import GlobalLock, KeyedLock, make_lock
from iconcache.cache.stats import CacheStats
from iconcache.cache.store import DiskStore

__all__ = [
    "CacheStats",
    "DiskStore",
    "GlobalLock",
    "KeyedLock",
    "content_key",
    "hash_image",
    "make_lock",
    "transparent_key",
]
