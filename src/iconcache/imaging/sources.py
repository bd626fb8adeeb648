"""Normalize every image source shape into one owned byte buffer."""

from __future__ import annotations

import io
import logging
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from iconcache.errors.exceptions import UnreadableSource
from iconcache.imaging.codec import format_for_suffix
from iconcache.types import ImageSource, SourceKind

if TYPE_CHECKING:
    from iconcache.imaging.codec import Codec
    from iconcache.imaging.fetch import UrlFetcher

logger = logging.getLogger(__name__)


def normalize_to_buffer(
    source: ImageSource,
    codec: Codec,
    fetcher: UrlFetcher | None = None,
) -> bytes:
    """Read ``source`` fully into memory.

    Streams are consumed from their current position. Those that already
    expose their bytes (``getbuffer()``) are sliced directly instead of being
    read through. Rasters are encoded as PNG.
    """
    kind = source.kind
    value = source.value

    if kind == SourceKind.FILE_PATH:
        return _read_path(value)
    if kind == SourceKind.URL:
        if fetcher is None:
            raise UnreadableSource(f"No URL fetcher configured for {value}", source=value)
        return fetcher.fetch(value)
    if kind == SourceKind.RASTER:
        return codec.encode(value, "PNG")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return _read_stream(value)


def format_hint(source: ImageSource) -> str | None:
    """Save format implied by the source's extension, None when there is none."""
    if source.kind == SourceKind.FILE_PATH:
        return format_for_suffix(Path(source.value).suffix)
    if source.kind == SourceKind.URL:
        return format_for_suffix(PurePosixPath(urlsplit(source.value).path).suffix)
    name = getattr(source.value, "name", None)
    if isinstance(name, str):
        return format_for_suffix(Path(name).suffix)
    return None


def _read_path(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except (OSError, ValueError) as e:
        raise UnreadableSource(f"Error reading image file {path}: {e}", source=str(path), original=e) from e


def _read_stream(stream: object) -> bytes:
    """Bytes from the current position to the end, however the stream exposes them."""
    getbuffer = getattr(stream, "getbuffer", None)
    if callable(getbuffer):
        try:
            position = stream.tell()  # type: ignore[attr-defined]
            with getbuffer() as view:
                data = bytes(view[position:])
            stream.seek(0, io.SEEK_END)  # type: ignore[attr-defined]
            return data
        except (AttributeError, OSError, TypeError, ValueError) as e:
            logger.debug("Stream buffer not addressable, reading through: %s", e)
    try:
        data = stream.read()  # type: ignore[attr-defined]
    except (OSError, ValueError) as e:
        raise UnreadableSource(f"Unable to read from image stream: {e}", original=e) from e
    if not isinstance(data, (bytes, bytearray)):
        raise UnreadableSource(f"Image stream returned {type(data).__name__}, expected bytes")
    return bytes(data)
