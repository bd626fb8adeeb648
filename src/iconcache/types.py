"""Shared Pydantic models for iconcache."""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path
from typing import Any

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

# ── Enums ──


class SourceKind(StrEnum):
    FILE_PATH = "file_path"
    URL = "url"
    BYTE_STREAM = "byte_stream"
    RASTER = "raster"


class ResultStatus(StrEnum):
    RESIZED = "resized"
    VERBATIM = "verbatim"
    CACHED = "cached"
    DEGRADED = "degraded"
    EMPTY = "empty"


class ErrorKind(StrEnum):
    UNREADABLE_SOURCE = "unreadable_source"
    UNREADABLE_IMAGE = "unreadable_image"
    CACHE_WRITE_FAILURE = "cache_write_failure"
    CACHE_READ_FAILURE = "cache_read_failure"
    INVALID_ARGUMENT = "invalid_argument"
    PLACEHOLDER_UNAVAILABLE = "placeholder_unavailable"
    UNKNOWN = "unknown"


class LockMode(StrEnum):
    GLOBAL = "global"
    PER_KEY = "per_key"


_URL_SCHEMES = ("http://", "https://")


# ── Sources ──


class ImageSource(BaseModel):
    """One image input, tagged with the shape it arrived in.

    Build with ``ImageSource.of(value)`` rather than directly.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: SourceKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> ImageSource | None:
        """Classify a caller value. Returns None for null/empty inputs."""
        if value is None:
            return None
        if isinstance(value, ImageSource):
            return value
        if isinstance(value, str):
            if not value:
                return None
            if value.lower().startswith(_URL_SCHEMES):
                return cls(kind=SourceKind.URL, value=value)
            return cls(kind=SourceKind.FILE_PATH, value=Path(value))
        if isinstance(value, os.PathLike):
            return cls(kind=SourceKind.FILE_PATH, value=Path(value))
        if isinstance(value, (bytes, bytearray, memoryview)):
            if len(value) == 0:
                return None
            return cls(kind=SourceKind.BYTE_STREAM, value=value)
        if isinstance(value, Image.Image):
            return cls(kind=SourceKind.RASTER, value=value)
        if hasattr(value, "read"):
            return cls(kind=SourceKind.BYTE_STREAM, value=value)

        raise TypeError(f"Unsupported image source type: {type(value).__name__}")

    @property
    def label(self) -> str:
        """Short human-readable description for log lines."""
        if self.kind in (SourceKind.FILE_PATH, SourceKind.URL):
            return str(self.value)
        return f"<{self.kind.value}>"


# ── Display sizing ──


class ScalingFactor(BaseModel):
    """What a platform DPI probe reports. 0 means "not detected"."""

    tray: float = 0.0
    menu: float = 0.0


class DisplayConfig(BaseModel):
    """Icon sizes for the tray and for menu entries, computed once at startup."""

    model_config = ConfigDict(frozen=True)

    tray_size: int = Field(default=16, gt=0)
    entry_size: int = Field(default=16, gt=0)


# ── Results ──


class ResizeResult(BaseModel):
    """Outcome of one resize request.

    ``path`` is always a readable image file unless ``status`` is EMPTY.
    """

    path: Path | None = None
    status: ResultStatus
    key: str | None = None
    error_kind: ErrorKind | None = None
    reason: str = ""

    @property
    def degraded(self) -> bool:
        return self.status == ResultStatus.DEGRADED
