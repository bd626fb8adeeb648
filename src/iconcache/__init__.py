"""iconcache — content-addressed image resize cache for tray and menu icons."""

from iconcache.core import IconCache, get_default_cache, resize_and_cache, transparent_image
from iconcache.types import DisplayConfig, ImageSource, ResizeResult, ResultStatus, ScalingFactor

__version__ = "0.1.0"

__all__ = [
    "DisplayConfig",
    "IconCache",
    "ImageSource",
    "ResizeResult",
    "ResultStatus",
    "ScalingFactor",
    "get_default_cache",
    "resize_and_cache",
    "transparent_image",
]
