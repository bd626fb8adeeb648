"""Pydantic model for resolved iconcache settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from iconcache.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_FETCH_RETRIES,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_MENU_SIZE,
    DEFAULT_TRAY_SIZE,
)
from iconcache.types import DisplayConfig, LockMode


class IconCacheSettings(BaseModel):
    """Validated view over the merged configuration dict."""

    model_config = ConfigDict(extra="ignore")

    cache_dir: Path = DEFAULT_CACHE_DIR
    lock_mode: LockMode = LockMode.GLOBAL
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, gt=0)
    fetch_timeout: float | None = None
    fetch_retries: int = Field(default=DEFAULT_FETCH_RETRIES, ge=1)
    tray_size: int = Field(default=DEFAULT_TRAY_SIZE, gt=0)
    entry_size: int = Field(default=DEFAULT_MENU_SIZE, gt=0)
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_mapping(cls, config: dict[str, Any]) -> IconCacheSettings:
        return cls(**config)

    @property
    def display(self) -> DisplayConfig:
        return DisplayConfig(tray_size=self.tray_size, entry_size=self.entry_size)
