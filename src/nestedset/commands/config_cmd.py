"""
nestedset.commands.config_cmd - Inspect configuration.

- `nestedset config show` - Print the effective configuration as TOML
- `nestedset config path` - Print the location of the configuration file
"""

import argparse
import sys
from pathlib import Path

import tomlkit

from nestedset.commands.common import load_configuration
from nestedset.config import CONFIG_FILENAME, find_config_file


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)

    if action == "show":
        return cmd_show(args)
    elif action == "path":
        return cmd_path(args)

    print("Usage: nestedset config <show|path>", file=sys.stderr)
    return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Print the merged configuration (defaults, file, environment)."""
    config = load_configuration(args)
    if config is None:
        return 1

    print(tomlkit.dumps(config), end="")
    return 0


def cmd_path(args: argparse.Namespace) -> int:
    """Print the configuration file in effect."""
    path = getattr(args, "config", None) or find_config_file(Path.cwd())
    if path is None:
        print(f"No {CONFIG_FILENAME} found (using defaults)", file=sys.stderr)
        return 1

    print(Path(path).resolve())
    return 0
