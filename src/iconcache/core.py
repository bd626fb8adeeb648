"""Top-level entry points: resize_and_cache(), transparent_image(), IconCache."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from iconcache.cache.keys import content_key
from iconcache.cache.locks import make_lock
from iconcache.cache.stats import CacheStats
from iconcache.cache.store import DiskStore
from iconcache.config.defaults import DEFAULT_IMAGE_FORMAT
from iconcache.config.hierarchy import load_config_hierarchy
from iconcache.config.schema import IconCacheSettings
from iconcache.errors.exceptions import (
    IconCacheError,
    InvalidArgument,
    PlaceholderUnavailable,
)
from iconcache.errors.fallback import FallbackPolicy
from iconcache.imaging.codec import Codec, PillowCodec, suffix_for_format
from iconcache.imaging.fetch import UrlFetcher
from iconcache.imaging.sources import format_hint, normalize_to_buffer
from iconcache.types import ImageSource, LockMode, ResizeResult, ResultStatus

logger = logging.getLogger(__name__)


class IconCache:
    """Resize images to square icon sizes, once per distinct (size, content)."""

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        codec: Codec | None = None,
        fetcher: UrlFetcher | None = None,
        lock_mode: LockMode | str = LockMode.GLOBAL,
        store: DiskStore | None = None,
    ) -> None:
        self._store = store or DiskStore(Path(cache_dir) if cache_dir else None)
        self._codec = codec or PillowCodec()
        self._fetcher = fetcher or UrlFetcher()
        self._lock = make_lock(lock_mode)
        self._fallback = FallbackPolicy(self._store, self._codec)
        self._stats = CacheStats()
        self._stats_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: IconCacheSettings) -> IconCache:
        return cls(
            cache_dir=settings.cache_dir,
            fetcher=UrlFetcher(timeout=settings.fetch_timeout, max_attempts=settings.fetch_retries),
            lock_mode=settings.lock_mode,
        )

    @property
    def store(self) -> DiskStore:
        return self._store

    @property
    def fallback(self) -> FallbackPolicy:
        return self._fallback

    def resize_and_cache(self, target_size: int, source: Any) -> Path | None:
        """Return a cached ``target_size`` icon for ``source``.

        ``source`` may be a path, a URL string, bytes, a binary stream or a
        PIL image. None or empty input gives None. Any other failure gives the
        error placeholder rather than an exception.
        """
        return self.resize_and_cache_result(target_size, source).path

    def resize_and_cache_result(self, target_size: int, source: Any) -> ResizeResult:
        """Same as resize_and_cache(), but tells a degraded result from a real one."""
        _validate_size(target_size)

        try:
            image_source = ImageSource.of(source)
        except TypeError as e:
            raise InvalidArgument(str(e)) from e
        if image_source is None:
            return ResizeResult(status=ResultStatus.EMPTY)

        key: str | None = None
        try:
            buffer = normalize_to_buffer(image_source, self._codec, self._fetcher)
            if not buffer:
                return ResizeResult(status=ResultStatus.EMPTY)
            key = content_key(target_size, buffer)
            with self._lock.hold(key):
                result = self._lookup_or_populate(key, target_size, buffer, format_hint(image_source))
        except PlaceholderUnavailable:
            raise
        except IconCacheError as e:
            return self._degrade(e, image_source, key)
        except Exception as e:
            wrapped = IconCacheError(f"{type(e).__name__}: {e}", original=e)
            return self._degrade(wrapped, image_source, key)

        self._record(result.status)
        return result

    def transparent_image(self, size: int) -> Path:
        """Path of a fully transparent square icon of ``size`` pixels."""
        _validate_size(size)
        try:
            with self._lock.hold(f"{size}_empty"):
                return self._fallback.transparent_image(size)
        except PlaceholderUnavailable:
            raise
        except Exception as e:
            logger.error("Error creating transparent image. Using error icon instead: %s", e)
            return self._fallback.error_image()

    def stats(self) -> CacheStats:
        """Return hit/miss counters plus the store's current footprint."""
        with self._stats_lock:
            counters = self._stats.model_copy()
        counters.entries = self._store.entry_count
        counters.size_mb = self._store.size_mb
        return counters

    def close(self) -> None:
        self._fetcher.close()

    # ── pipeline stages ──

    def _lookup_or_populate(
        self, key: str, target_size: int, buffer: bytes, fmt: str | None
    ) -> ResizeResult:
        cached = self._store.get(key)
        if cached is not None:
            return ResizeResult(path=cached, status=ResultStatus.CACHED, key=key)

        width, height = self._codec.probe_dimensions(buffer)
        if width == target_size and height == target_size:
            fmt = fmt or self._codec.detect_format(buffer)
            path = self._store.put(key, buffer, suffix=suffix_for_format(fmt))
            return ResizeResult(path=path, status=ResultStatus.VERBATIM, key=key)

        fmt = fmt or DEFAULT_IMAGE_FORMAT
        raster = self._codec.decode(buffer)
        scaled = self._codec.scale(raster, target_size)
        encoded = self._codec.encode(scaled, fmt)
        path = self._store.put(key, encoded, suffix=suffix_for_format(fmt))
        logger.debug("Resized %dx%d -> %dx%d (%s)", width, height, *scaled.size, path.name)
        return ResizeResult(path=path, status=ResultStatus.RESIZED, key=key)

    def _degrade(self, error: IconCacheError, source: ImageSource, key: str | None) -> ResizeResult:
        logger.error(
            "Error processing image %s (%s). Using error icon instead: %s",
            source.label,
            error.kind.value,
            error.message,
        )
        self._record(ResultStatus.DEGRADED)
        return ResizeResult(
            path=self._fallback.error_image(),
            status=ResultStatus.DEGRADED,
            key=key,
            error_kind=error.kind,
            reason=error.message,
        )

    def _record(self, status: ResultStatus) -> None:
        with self._stats_lock:
            if status == ResultStatus.CACHED:
                self._stats.hits += 1
            elif status == ResultStatus.DEGRADED:
                self._stats.degraded += 1
            else:
                self._stats.misses += 1


_default_cache: IconCache | None = None
_default_lock = threading.Lock()


def get_default_cache() -> IconCache:
    """The process-wide IconCache, built from the configuration hierarchy on first use."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            settings = IconCacheSettings.from_mapping(load_config_hierarchy())
            _default_cache = IconCache.from_settings(settings)
        return _default_cache


def resize_and_cache(target_size: int, source: Any) -> Path | None:
    """Resize ``source`` to ``target_size`` using the default cache."""
    return get_default_cache().resize_and_cache(target_size, source)


def transparent_image(size: int) -> Path:
    """Transparent placeholder of ``size`` pixels from the default cache."""
    return get_default_cache().transparent_image(size)


def _validate_size(size: int) -> None:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidArgument(f"Icon size must be a positive integer, got {size!r}")

