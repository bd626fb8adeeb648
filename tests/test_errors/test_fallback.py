"""Tests for the placeholder fallback policy."""

import atexit
from unittest.mock import patch

import pytest
from PIL import Image

from iconcache.cache.store import DiskStore
from iconcache.errors.exceptions import CacheWriteFailure, PlaceholderUnavailable
from iconcache.errors.fallback import FallbackPolicy, _remove_quietly


@pytest.fixture
def policy(tmp_path):
    return FallbackPolicy(DiskStore(tmp_path / "cache"))


class TestErrorImage:
    def test_extracts_bundled_png(self, policy, tmp_path):
        path = policy.error_image()
        assert path == tmp_path / "cache" / "error_32.png"
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == (32, 32)

    def test_extracted_once(self, policy):
        with patch.object(policy._store, "put", wraps=policy._store.put) as put:
            first = policy.error_image()
            second = policy.error_image()
        assert first == second
        assert put.call_count == 1

    def test_reextracted_if_deleted(self, policy):
        first = policy.error_image()
        first.unlink()
        second = policy.error_image()
        assert second.is_file()

    def test_registered_for_exit_cleanup_once(self, policy):
        with patch.object(atexit, "register") as register:
            path = policy.error_image()
            path.unlink()
            policy.error_image()
        register.assert_called_once_with(_remove_quietly, path)

    def test_unwritable_store_is_fatal(self, policy):
        with patch.object(policy._store, "put", side_effect=CacheWriteFailure("disk full")):
            with pytest.raises(PlaceholderUnavailable):
                policy.error_image()

    def test_remove_quietly(self, tmp_path):
        path = tmp_path / "error_32.png"
        path.write_bytes(b"x")
        _remove_quietly(path)
        assert not path.exists()
        _remove_quietly(path)  # already gone


class TestTransparentImage:
    def test_fully_transparent_square(self, policy):
        path = policy.transparent_image(24)
        assert path.name == "24_empty.png"
        with Image.open(path) as img:
            assert img.size == (24, 24)
            rgba = img.convert("RGBA")
            assert rgba.getextrema()[3] == (0, 0)

    def test_idempotent(self, policy):
        first = policy.transparent_image(16)
        mtime = first.stat().st_mtime_ns
        second = policy.transparent_image(16)
        assert first == second
        assert second.stat().st_mtime_ns == mtime

    def test_regenerated_when_cold(self, policy):
        first = policy.transparent_image(16)
        first.unlink()
        second = policy.transparent_image(16)
        assert second.is_file()

    def test_sizes_are_separate_entries(self, policy):
        assert policy.transparent_image(16) != policy.transparent_image(32)

    def test_raster(self, policy):
        img = policy.transparent_raster(8)
        assert img.mode == "RGBA"
        assert img.size == (8, 8)
        assert img.getpixel((3, 3)) == (0, 0, 0, 0)
