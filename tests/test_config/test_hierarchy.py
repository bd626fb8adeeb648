"""Tests for config hierarchy and settings validation."""

import pytest
from pydantic import ValidationError

from iconcache.config import hierarchy
from iconcache.config.hierarchy import (
    _coerce_env_value,
    _load_yaml_config,
    load_config_hierarchy,
)
from iconcache.config.schema import IconCacheSettings
from iconcache.types import LockMode


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real global config and env out of these tests."""
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadConfigHierarchy:
    def test_returns_defaults(self):
        config = load_config_hierarchy()
        assert config["lock_mode"] == "global"
        assert config["tray_size"] == 16

    def test_runtime_overrides(self):
        config = load_config_hierarchy(lock_mode="per_key", max_workers=10)
        assert config["lock_mode"] == "per_key"
        assert config["max_workers"] == 10

    def test_none_overrides_ignored(self):
        config = load_config_hierarchy(cache_dir=None)
        assert config["cache_dir"].endswith("ResizedImages")

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("ICONCACHE_LOCK_MODE", "per_key")
        assert load_config_hierarchy()["lock_mode"] == "per_key"

    def test_runtime_beats_env(self, monkeypatch):
        monkeypatch.setenv("ICONCACHE_TRAY_SIZE", "32")
        assert load_config_hierarchy(tray_size=48)["tray_size"] == 48

    def test_env_numeric_coercion(self, monkeypatch):
        monkeypatch.setenv("ICONCACHE_ENTRY_SIZE", "24")
        monkeypatch.setenv("ICONCACHE_FETCH_TIMEOUT", "2.5")
        config = load_config_hierarchy()
        assert config["entry_size"] == 24
        assert config["fetch_timeout"] == 2.5

    def test_global_config(self, tmp_path):
        global_file = tmp_path / "global" / "config.yaml"
        global_file.parent.mkdir()
        global_file.write_text("tray_size: 32\n")
        assert load_config_hierarchy()["tray_size"] == 32

    def test_project_beats_global(self, tmp_path):
        global_file = tmp_path / "global" / "config.yaml"
        global_file.parent.mkdir()
        global_file.write_text("tray_size: 32\n")
        (tmp_path / "iconcache.yaml").write_text("tray_size: 64\n")
        assert load_config_hierarchy()["tray_size"] == 64

    def test_project_config_found_upward(self, tmp_path, monkeypatch):
        (tmp_path / "iconcache.yaml").write_text("lock_mode: per_key\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_config_hierarchy()["lock_mode"] == "per_key"


class TestLoadYamlConfig:
    def test_loads_valid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("key: value\n")
        assert _load_yaml_config(path) == {"key": "value"}

    def test_returns_none_for_missing(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nonexistent.yaml") is None

    def test_returns_none_for_non_dict(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- item1\n- item2\n")
        assert _load_yaml_config(path) is None

    def test_returns_none_for_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("key: [unclosed\n")
        assert _load_yaml_config(path) is None


class TestCoerceEnvValue:
    def test_int_coercion(self):
        assert _coerce_env_value("max_workers", "10") == 10

    def test_float_coercion(self):
        assert _coerce_env_value("fetch_timeout", "0.5") == 0.5

    def test_bad_number_passthrough(self):
        assert _coerce_env_value("tray_size", "big") == "big"

    def test_string_passthrough(self):
        assert _coerce_env_value("cache_dir", "/var/cache/icons") == "/var/cache/icons"


class TestIconCacheSettings:
    def test_from_defaults(self):
        settings = IconCacheSettings.from_mapping(load_config_hierarchy())
        assert settings.lock_mode == LockMode.GLOBAL
        assert settings.cache_dir.name == "ResizedImages"
        assert settings.fetch_timeout is None

    def test_display(self):
        settings = IconCacheSettings(tray_size=32, entry_size=24)
        assert settings.display.tray_size == 32
        assert settings.display.entry_size == 24

    def test_unknown_keys_ignored(self):
        settings = IconCacheSettings.from_mapping({"something_else": 1})
        assert settings.tray_size == 16

    def test_rejects_bad_lock_mode(self):
        with pytest.raises(ValidationError):
            IconCacheSettings(lock_mode="sometimes")

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValidationError):
            IconCacheSettings(tray_size=0)


class TestNullableEnv:
    @pytest.mark.parametrize("raw", ["", "none", "NULL"])
    def test_timeout_can_be_cleared(self, raw):
        assert _coerce_env_value("fetch_timeout", raw) is None

    def test_env_clears_yaml_timeout(self, tmp_path, monkeypatch):
        (tmp_path / "iconcache.yaml").write_text("fetch_timeout: 5\n")
        monkeypatch.setenv("ICONCACHE_FETCH_TIMEOUT", "none")
        assert load_config_hierarchy()["fetch_timeout"] is None
