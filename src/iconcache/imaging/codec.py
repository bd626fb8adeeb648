"""Pillow-backed codec: probe, decode, scale and encode rasters."""

from __future__ import annotations

import io
import logging
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from iconcache.config.defaults import DEFAULT_IMAGE_FORMAT
from iconcache.errors.exceptions import InvalidArgument, UnreadableImage

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError)

# Formats that cannot carry an alpha channel
_NO_ALPHA_FORMATS = {"JPEG", "BMP"}

# Modes handed to the encoder unchanged; others (CMYK, YCbCr, LAB) are widened to RGBA
_PORTABLE_MODES = {"1", "L", "LA", "P", "RGB", "RGBA"}
_PNG_EXTRA_MODES = {"I", "I;16"}


class Codec(Protocol):
    """What the resize pipeline needs from an image library."""

    def probe_dimensions(self, image_bytes: bytes) -> tuple[int, int]: ...

    def detect_format(self, image_bytes: bytes) -> str | None: ...

    def decode(self, image_bytes: bytes) -> Image.Image: ...

    def encode(self, raster: Image.Image, fmt: str) -> bytes: ...

    def scale(self, raster: Image.Image, target_size: int) -> Image.Image: ...


class PillowCodec:
    """Codec implementation on top of Pillow."""

    def probe_dimensions(self, image_bytes: bytes) -> tuple[int, int]:
        """Read width and height from the format header without decoding pixels."""
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                return img.size
        except _DECODE_ERRORS as e:
            raise UnreadableImage(f"Unable to read image size data: {e}", original=e) from e

    def detect_format(self, image_bytes: bytes) -> str | None:
        """Pillow format name of the encoded bytes (``PNG``, ``JPEG``), if known."""
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                return img.format
        except _DECODE_ERRORS as e:
            raise UnreadableImage(f"Unable to identify image format: {e}", original=e) from e

    def decode(self, image_bytes: bytes) -> Image.Image:
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img.load()
        except _DECODE_ERRORS as e:
            raise UnreadableImage(f"Unable to decode image: {e}", original=e) from e
        return img

    def encode(self, raster: Image.Image, fmt: str = DEFAULT_IMAGE_FORMAT) -> bytes:
        fmt = fmt.upper()
        buf = io.BytesIO()
        try:
            _for_format(raster, fmt).save(buf, format=fmt)
        except (OSError, ValueError, KeyError) as e:
            raise UnreadableImage(f"Unable to encode image as {fmt}: {e}", original=e) from e
        return buf.getvalue()

    def scale(self, raster: Image.Image, target_size: int) -> Image.Image:
        """Resize so the longest side equals ``target_size``, keeping aspect."""
        if target_size <= 0:
            raise InvalidArgument(f"Target size must be positive, got {target_size}")
        w, h = raster.size
        ratio = target_size / max(w, h)
        new_size = (max(1, round(w * ratio)), max(1, round(h * ratio)))
        if raster.mode not in ("RGB", "RGBA", "L", "LA"):
            raster = raster.convert("RGBA")
        return raster.resize(new_size, Image.LANCZOS)


def transparent_raster(size: int) -> Image.Image:
    """A ``size`` x ``size`` RGBA square with every pixel at zero alpha."""
    if size <= 0:
        raise InvalidArgument(f"Placeholder size must be positive, got {size}")
    return Image.new("RGBA", (size, size), (0, 0, 0, 0))


def format_for_suffix(suffix: str) -> str | None:
    """Map a file extension (``.png``) to a Pillow save format, if writable."""
    if not suffix:
        return None
    fmt = Image.registered_extensions().get(suffix.lower())
    if fmt is None or fmt not in Image.SAVE:
        return None
    return fmt


_PREFERRED_EXTENSIONS = {
    "JPEG": ".jpg",
    "TIFF": ".tif",
    "PNG": ".png",
    "GIF": ".gif",
    "BMP": ".bmp",
    "ICO": ".ico",
    "WEBP": ".webp",
}


def suffix_for_format(fmt: str | None) -> str:
    """File extension for a Pillow format name (``PNG`` -> ``.png``), or ""."""
    if not fmt:
        return ""
    fmt = fmt.upper()
    if fmt in _PREFERRED_EXTENSIONS:
        return _PREFERRED_EXTENSIONS[fmt]
    for ext, name in Image.registered_extensions().items():
        if name == fmt:
            return ext
    return ""


def _for_format(raster: Image.Image, fmt: str) -> Image.Image:
    mode = raster.mode
    if fmt in _NO_ALPHA_FORMATS:
        return raster if mode in ("RGB", "L") else raster.convert("RGB")
    if mode == "P" and fmt not in ("PNG", "GIF"):
        return raster.convert("RGBA")
    if mode in _PORTABLE_MODES or (fmt == "PNG" and mode in _PNG_EXTRA_MODES):
        return raster
    return raster.convert("RGBA")
