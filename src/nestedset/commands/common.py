"""
nestedset.commands.common - Helpers shared by the CLI commands.
"""

import argparse
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, TextIO

from nestedset.config import ConfigError, get_config
from nestedset.core.models import Node
from nestedset.formats import Format, FormatError, format_from_path, parse_format, read_nodes


def load_configuration(args: argparse.Namespace) -> Optional[Dict]:
    """Load configuration from --config, a discovered file, or defaults."""
    config_path = getattr(args, "config", None)
    if config_path is not None and not Path(config_path).exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        return None

    try:
        return get_config(config_path)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def reporter(args: argparse.Namespace) -> Optional[Callable[[str], None]]:
    """Return a stderr printer when --verbose is set, else None."""
    if not getattr(args, "verbose", False) or getattr(args, "quiet", False):
        return None

    def report(message: str) -> None:
        print(message, file=sys.stderr)

    return report


def input_format(args: argparse.Namespace, config: Dict) -> Format:
    """Resolve the input format: --from, input extension, then config.

    Raises:
        FormatError: Format cannot be determined.
    """
    if getattr(args, "from_format", None):
        return parse_format(args.from_format)

    detected = format_from_path(getattr(args, "input", None))
    if detected is not None:
        return detected

    configured = config.get("input", {}).get("format")
    if configured:
        return parse_format(configured)

    raise FormatError("missing option --from")


def output_format(args: argparse.Namespace, config: Dict, source: Format) -> Format:
    """Resolve the output format: --to, output extension, config, then input format."""
    if getattr(args, "to_format", None):
        return parse_format(args.to_format)

    detected = format_from_path(getattr(args, "output", None))
    if detected is not None:
        return detected

    configured = config.get("output", {}).get("format")
    if configured:
        return parse_format(configured)

    return source


@contextmanager
def open_input(path: Optional[Path]) -> Iterator[TextIO]:
    """Open the input file, or stdin when no path is given."""
    if path is None:
        yield sys.stdin
        return
    with open(path, encoding="utf-8", newline="") as f:
        yield f


@contextmanager
def open_output(path: Optional[Path]) -> Iterator[TextIO]:
    """Open the output file for writing, or stdout when no path is given."""
    if path is None:
        yield sys.stdout
        return
    with open(path, "w", encoding="utf-8", newline="") as f:
        yield f


def load_nodes(args: argparse.Namespace, config: Dict) -> List[Node]:
    """Read raw nodes from the command's input.

    Raises:
        FormatError: Undeterminable format or malformed input.
        OSError: Input file cannot be read.
    """
    fmt = input_format(args, config)
    fields = config.get("input", {}).get("fields")
    with open_input(getattr(args, "input", None)) as stream:
        return read_nodes(stream, fmt, fields)
