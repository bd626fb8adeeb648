"""Cache key generation: content-addressed and size-qualified."""

from __future__ import annotations

import hashlib

ERROR_IMAGE_KEY = "error_32"


def content_key(target_size: int, image_bytes: bytes) -> str:
    """Key for a resized image: ``<size>_<sha256 of the source bytes>``.

    Depends only on the bytes, never on where they came from, so a path,
    a URL and a stream carrying the same image share one entry.
    """
    return f"{target_size}_{hash_image(image_bytes)}"


def hash_image(image_bytes: bytes) -> str:
    """Hash image bytes for cache key use."""
    return hashlib.sha256(image_bytes).hexdigest()


def transparent_key(size: int) -> str:
    """Key for the blank placeholder of a given size. Content follows from size."""
    return f"{size}_empty"
