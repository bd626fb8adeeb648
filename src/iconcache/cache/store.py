"""Content-addressed file store, one file per key and no index."""

from __future__ import annotations

import contextlib
import logging
import shutil
from pathlib import Path
from uuid import uuid4

from iconcache.config.defaults import DEFAULT_CACHE_DIR
from iconcache.errors.exceptions import CacheReadFailure, CacheWriteFailure

logger = logging.getLogger(__name__)

_TMP_PREFIX = "."


class DiskStore:
    """Flat directory of cached image files named after their keys.

    A file called ``<key>`` or ``<key>.<ext>`` existing in the directory *is*
    the entry. Writes land in a hidden temp file first and are published with
    an atomic rename, so readers never see a half-written image.
    """

    def __init__(self, cache_dir: Path | None = None) -> None:
        self._cache_dir = Path(cache_dir or DEFAULT_CACHE_DIR)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def get(self, key: str) -> Path | None:
        """Return the file stored under ``key``, or None when absent."""
        try:
            if not self._cache_dir.is_dir():
                return None
            exact = self._cache_dir / key
            if exact.is_file():
                return exact
            for candidate in sorted(self._cache_dir.glob(f"{key}.*")):
                if candidate.is_file():
                    return candidate
        except OSError as e:
            raise CacheReadFailure(f"Cannot read cache entry '{key}': {e}", key=key, original=e) from e
        return None

    def put(self, key: str, data: bytes | Path, suffix: str = "") -> Path:
        """Persist bytes (or a copy of a file) under ``key`` and return its path."""
        target = self._cache_dir / f"{key}{suffix}"
        tmp_path = self._cache_dir / f"{_TMP_PREFIX}{key}.tmp.{uuid4().hex}"
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            if isinstance(data, Path):
                shutil.copyfile(data, tmp_path)
            else:
                tmp_path.write_bytes(data)
            tmp_path.replace(target)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise CacheWriteFailure(f"Cannot write cache entry '{key}': {e}", key=key, original=e) from e

        logger.debug("Cached %s", target.name)
        return target

    def delete(self, key: str) -> bool:
        """Remove the entry for ``key``. Returns True if a file was removed."""
        path = self.get(key)
        if path is None:
            return False
        path.unlink(missing_ok=True)
        return True

    def clear(self) -> int:
        """Remove every entry. Returns the number of files deleted."""
        count = 0
        for path in self._entries():
            path.unlink(missing_ok=True)
            count += 1
        return count

    @property
    def entry_count(self) -> int:
        return sum(1 for _ in self._entries())

    @property
    def size_mb(self) -> float:
        total = 0
        for path in self._entries():
            try:
                total += path.stat().st_size
            except FileNotFoundError:
                # Removed by another process since the listing
                continue
        return total / (1024 * 1024)

    def _entries(self) -> list[Path]:
        if not self._cache_dir.is_dir():
            return []
        return [
            p for p in self._cache_dir.iterdir()
            if p.is_file() and not p.name.startswith(_TMP_PREFIX)
        ]
