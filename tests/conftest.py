import io

import pytest
from PIL import Image

from iconcache.core import IconCache


def make_png(width: int, height: int, color=(200, 40, 40, 255)) -> bytes:
    """Encode a solid-colour RGBA PNG of the given size."""
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sample_image_bytes():
    """100x50 PNG, wider than tall."""
    return make_png(100, 50)


@pytest.fixture
def square_image_bytes():
    """32x32 PNG."""
    return make_png(32, 32, color=(10, 120, 200, 255))


@pytest.fixture
def sample_image_file(tmp_path, sample_image_bytes):
    path = tmp_path / "source" / "wide.png"
    path.parent.mkdir()
    path.write_bytes(sample_image_bytes)
    return path


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "ResizedImages"


@pytest.fixture
def icon_cache(cache_dir):
    cache = IconCache(cache_dir=cache_dir)
    try:
        yield cache
    finally:
        cache.close()


@pytest.fixture
def png_factory():
    """Build PNG bytes on demand: ``png_factory(w, h, color=...)``."""
    return make_png
