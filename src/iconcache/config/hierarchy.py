"""Configuration hierarchy — merges sources in priority order.

Each layer overrides the ones before it:
  1. Package defaults
  2. ~/.iconcache/config.yaml
  3. iconcache.yaml in the working directory or the nearest parent
  4. ICONCACHE_<KEY> environment variables
  5. Keyword arguments passed at runtime (None means "not given")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from iconcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".iconcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "iconcache.yaml"
_ENV_PREFIX = "ICONCACHE_"

_ENV_KEYS = (
    "cache_dir",
    "lock_mode",
    "max_workers",
    "fetch_timeout",
    "fetch_retries",
    "tray_size",
    "entry_size",
    "log_level",
)
_ENV_MAP: dict[str, str] = {f"{_ENV_PREFIX}{key.upper()}": key for key in _ENV_KEYS}

_NUMERIC_KEYS: dict[str, type] = {
    "max_workers": int,
    "fetch_retries": int,
    "tray_size": int,
    "entry_size": int,
    "fetch_timeout": float,
}

# Keys whose value may be switched off from the environment
_NULLABLE_KEYS = {"fetch_timeout"}
_NULL_WORDS = {"", "none", "null"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Resolve the effective configuration as a plain dict."""
    config = get_defaults()
    for source, layer in _file_layers():
        logger.debug("Applying config from %s", source)
        config.update(layer)

    config.update(_load_env_vars())
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return config


def _file_layers() -> Iterator[tuple[Path, dict[str, Any]]]:
    candidates = [_GLOBAL_CONFIG_PATH, _find_project_config()]
    for path in candidates:
        if path is None:
            continue
        data = _load_yaml_config(path)
        if data:
            yield path, data


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Parse ``path`` as a YAML mapping; anything else counts as no config."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _find_project_config() -> Path | None:
    """Nearest iconcache.yaml walking up from the working directory."""
    here = Path.cwd()
    return next(
        (d / _PROJECT_CONFIG_NAME for d in (here, *here.parents) if (d / _PROJECT_CONFIG_NAME).is_file()),
        None,
    )


def _load_env_vars() -> dict[str, Any]:
    return {
        key: _coerce_env_value(key, os.environ[name])
        for name, key in _ENV_MAP.items()
        if name in os.environ
    }


def _coerce_env_value(key: str, value: str) -> Any:
    """Turn an environment string into the type the settings model expects.

    Unparsable numbers are passed through unchanged so that validation
    reports them against the right field.
    """
    if key in _NULLABLE_KEYS and value.strip().lower() in _NULL_WORDS:
        return None
    convert = _NUMERIC_KEYS.get(key)
    if convert is None:
        return value
    try:
        return convert(value)
    except ValueError:
        logger.warning("Cannot convert %s%s=%r to %s", _ENV_PREFIX, key.upper(), value, convert.__name__)
        return value
