"""Placeholder images served in place of failures."""

from __future__ import annotations

import atexit
import logging
import threading
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

from iconcache.cache.keys import ERROR_IMAGE_KEY, transparent_key
from iconcache.cache.store import DiskStore
from iconcache.errors.exceptions import IconCacheError, PlaceholderUnavailable
from iconcache.imaging.codec import Codec, PillowCodec, transparent_raster

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

_ERROR_RESOURCE = "error_32.png"


class FallbackPolicy:
    """Serves placeholders from the same store as real entries.

    The error image is a copy of a bundled resource: it is extracted once per
    process and removed again at interpreter exit. Transparent images are a
    pure function of their size and live in the cache like any other entry.
    """

    def __init__(self, store: DiskStore, codec: Codec | None = None) -> None:
        self._store = store
        self._codec = codec or PillowCodec()
        self._lock = threading.Lock()
        self._error_path: Path | None = None

    def error_image(self) -> Path:
        """Path of the error placeholder, extracting it on first use.

        Raises PlaceholderUnavailable if the bundled image cannot be written.
        """
        with self._lock:
            if self._error_path is not None and self._error_path.is_file():
                return self._error_path
            try:
                data = resources.files("iconcache.resources").joinpath(_ERROR_RESOURCE).read_bytes()
                path = self._store.put(ERROR_IMAGE_KEY, data, suffix=".png")
            except (OSError, IconCacheError) as e:
                raise PlaceholderUnavailable(
                    f"Unable to extract error image, the installation is broken: {e}",
                    original=e,
                ) from e

            if self._error_path is None:
                atexit.register(_remove_quietly, path)
            self._error_path = path
            return path

    def transparent_image(self, size: int) -> Path:
        """Path of a fully transparent ``size`` x ``size`` PNG, generating it if needed."""
        key = transparent_key(size)
        cached = self._store.get(key)
        if cached is not None:
            return cached
        data = self._codec.encode(transparent_raster(size), "PNG")
        return self._store.put(key, data, suffix=".png")

    def transparent_raster(self, size: int) -> Image.Image:
        """The transparent square itself, for callers that want a raster."""
        return transparent_raster(size)


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove error placeholder %s: %s", path, e)
