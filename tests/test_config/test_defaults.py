"""Tests for package defaults."""

from pathlib import Path

from iconcache.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_LOCK_MODE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MENU_SIZE,
    DEFAULT_TRAY_SIZE,
    get_defaults,
)


class TestDefaults:
    def test_cache_dir_is_dedicated_subdirectory(self):
        assert DEFAULT_CACHE_DIR.name == "ResizedImages"

    def test_icon_sizes(self):
        assert DEFAULT_TRAY_SIZE == 16
        assert DEFAULT_MENU_SIZE == 16

    def test_global_lock_by_default(self):
        assert DEFAULT_LOCK_MODE == "global"

    def test_no_fetch_timeout(self):
        assert DEFAULT_FETCH_TIMEOUT is None

    def test_lossless_default_format(self):
        assert DEFAULT_IMAGE_FORMAT == "PNG"

    def test_default_log_level(self):
        assert DEFAULT_LOG_LEVEL == "WARNING"


class TestGetDefaults:
    def test_contains_all_keys(self):
        defaults = get_defaults()
        for key in (
            "cache_dir",
            "lock_mode",
            "max_workers",
            "fetch_timeout",
            "fetch_retries",
            "tray_size",
            "entry_size",
            "log_level",
        ):
            assert key in defaults

    def test_cache_dir_as_string(self):
        assert Path(get_defaults()["cache_dir"]) == DEFAULT_CACHE_DIR

    def test_returns_fresh_dict(self):
        first = get_defaults()
        first["tray_size"] = 99
        assert get_defaults()["tray_size"] == DEFAULT_TRAY_SIZE
