"""
nestedset.config - Configuration loading and defaults
"""

from nestedset.config.defaults import DEFAULT_CONFIG
from nestedset.config.loader import (
    CONFIG_FILENAME,
    ConfigError,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
]
