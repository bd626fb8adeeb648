"""Configuration: layered defaults, YAML files, env vars and display sizing."""

from iconcache.config.display import detect_display_config, display_config_for
from iconcache.config.hierarchy import load_config_hierarchy
from iconcache.config.schema import IconCacheSettings

__all__ = [
    "IconCacheSettings",
    "detect_display_config",
    "display_config_for",
    "load_config_hierarchy",
]
