"""
nestedset.config.loader - Configuration file discovery and loading.

Configuration lives in a `.nestedset.toml` file, found by walking up from
the working directory. File values are deep-merged over DEFAULT_CONFIG,
then NESTEDSET_<SECTION>_<KEY> environment variables are applied.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from nestedset.config.defaults import DEFAULT_CONFIG
from nestedset.core.errors import NestedSetError

CONFIG_FILENAME = ".nestedset.toml"
ENV_PREFIX = "NESTEDSET_"


class ConfigError(NestedSetError, ValueError):
    """Configuration file cannot be read or parsed."""


def find_config_file(start: Path) -> Optional[Path]:
    """
    Find the configuration file in start or any parent directory.

    Args:
        start: Directory to start searching from

    Returns:
        Path to the config file, or None if not found
    """
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent

    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    return None


def load_config(path: Path) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    Args:
        path: Path to a TOML configuration file

    Returns:
        Merged configuration dictionary

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        user = tomlkit.parse(content).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    return merge_configs(DEFAULT_CONFIG, user)


def merge_configs(defaults: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge user configuration over defaults.

    Nested tables are merged key by key; any other user value replaces
    the default. Neither argument is modified.

    Args:
        defaults: Base configuration
        user: Overriding configuration

    Returns:
        New merged dictionary
    """
    merged = copy.deepcopy(defaults)

    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def get_config(config_path: Optional[Path] = None, start: Optional[Path] = None) -> Dict[str, Any]:
    """
    Resolve the effective configuration.

    Uses config_path if given, otherwise searches from start (default:
    current directory). Falls back to the defaults when no file exists.

    Args:
        config_path: Explicit configuration file
        start: Directory to search from

    Returns:
        Effective configuration with environment overrides applied
    """
    path = config_path or find_config_file(start or Path.cwd())
    if path is not None:
        config = load_config(path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    return _apply_env_overrides(config)


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value into a typed value where possible.

    JSON arrays and objects become lists and dicts, true/false (any case)
    become booleans, integers become ints. Anything else, including
    malformed JSON, stays a string.
    """
    stripped = value.strip()

    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value

    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    try:
        return int(stripped)
    except ValueError:
        return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply NESTEDSET_<SECTION>_<KEY> environment variables.

    The section is the first word after the prefix; the rest, lowercased,
    is the key (e.g. NESTEDSET_REBUILD_MAX_UNFOLD_PASSES sets
    rebuild.max_unfold_passes). Missing sections are created.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue

        parts = name[len(ENV_PREFIX):].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue

        section, key = parts
        if not isinstance(config.get(section), dict):
            config[section] = {}
        config[section][key] = _try_parse_env_value(raw)

    return config
