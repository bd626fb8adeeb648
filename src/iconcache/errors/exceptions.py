"""Custom exception hierarchy for iconcache."""

from __future__ import annotations

from iconcache.types import ErrorKind


class IconCacheError(Exception):
    """Base exception for all iconcache errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str = "", original: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original = original


class UnreadableSource(IconCacheError):
    """The source bytes could not be obtained.

    Examples: missing file, permission denied, HTTP error, broken stream.
    """

    kind = ErrorKind.UNREADABLE_SOURCE

    def __init__(
        self,
        message: str = "",
        source: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message, original=original)
        self.source = source


class UnreadableImage(IconCacheError):
    """Bytes were obtained but no codec could probe, decode or encode them."""

    kind = ErrorKind.UNREADABLE_IMAGE


class CacheWriteFailure(IconCacheError):
    """Publishing an entry to the cache store failed (disk full, permissions)."""

    kind = ErrorKind.CACHE_WRITE_FAILURE

    def __init__(self, message: str = "", key: str = "", original: Exception | None = None) -> None:
        super().__init__(message, original=original)
        self.key = key


class CacheReadFailure(IconCacheError):
    """Looking up an entry failed for a reason other than absence."""

    kind = ErrorKind.CACHE_READ_FAILURE

    def __init__(self, message: str = "", key: str = "", original: Exception | None = None) -> None:
        super().__init__(message, original=original)
        self.key = key


class InvalidArgument(IconCacheError, ValueError):
    """Caller passed an argument the cache cannot work with (e.g. size <= 0)."""

    kind = ErrorKind.INVALID_ARGUMENT


class PlaceholderUnavailable(IconCacheError):
    """The bundled error image could not be extracted.

    Fatal: there is no placeholder left to serve, so this one propagates.
    """

    kind = ErrorKind.PLACEHOLDER_UNAVAILABLE
