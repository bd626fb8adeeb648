"""Exception hierarchy and placeholder fallback."""

from iconcache.errors.exceptions import (
    CacheReadFailure,
    CacheWriteFailure,
    IconCacheError,
    InvalidArgument,
    PlaceholderUnavailable,
    UnreadableImage,
    UnreadableSource,
)

__all__ = [
    "IconCacheError",
    "UnreadableSource",
    "UnreadableImage",
    "CacheReadFailure",
    "CacheWriteFailure",
    "InvalidArgument",
    "PlaceholderUnavailable",
]
