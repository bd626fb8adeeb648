"""Codec, source normalization and URL fetch."""

from iconcache.imaging.codec import Codec, PillowCodec, transparent_raster
from iconcache.imaging.fetch import UrlFetcher
from iconcache.imaging.sources import format_hint, normalize_to_buffer

__all__ = [
    "Codec",
    "PillowCodec",
    "UrlFetcher",
    "format_hint",
    "normalize_to_buffer",
    "transparent_raster",
]
