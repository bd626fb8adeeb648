"""Package-level default configuration values."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

# Default cache location
DEFAULT_CACHE_ROOT = Path(tempfile.gettempdir()) / "iconcache"
DEFAULT_CACHE_SUBDIR = "ResizedImages"
DEFAULT_CACHE_DIR = DEFAULT_CACHE_ROOT / DEFAULT_CACHE_SUBDIR

# Default concurrency settings
DEFAULT_LOCK_MODE = "global"
DEFAULT_MAX_WORKERS = 4

# Default URL fetch settings (no timeout unless configured)
DEFAULT_FETCH_TIMEOUT: float | None = None
DEFAULT_FETCH_RETRIES = 3

# Default icon sizes before scaling
DEFAULT_TRAY_SIZE = 16
DEFAULT_MENU_SIZE = 16

# Encoding used when a source has no discernible extension
DEFAULT_IMAGE_FORMAT = "PNG"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": str(DEFAULT_CACHE_DIR),
        "lock_mode": DEFAULT_LOCK_MODE,
        "max_workers": DEFAULT_MAX_WORKERS,
        "fetch_timeout": DEFAULT_FETCH_TIMEOUT,
        "fetch_retries": DEFAULT_FETCH_RETRIES,
        "tray_size": DEFAULT_TRAY_SIZE,
        "entry_size": DEFAULT_MENU_SIZE,
        "log_level": DEFAULT_LOG_LEVEL,
    }
