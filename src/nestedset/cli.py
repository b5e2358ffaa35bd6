"""
nestedset.cli - Command-line interface.

Main entry point for the nestedset CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from nestedset import __version__
from nestedset.commands import check, config_cmd, rebuild
from nestedset.formats import Format

FORMAT_CHOICES = [f.value for f in Format]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nestedset",
        description="Convert parent/child records into a nested set (lft/rgt)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nestedset rebuild tree.csv                 # Nested set as CSV on stdout
  nestedset rebuild tree.csv -t json         # Convert to JSON
  nestedset rebuild -f tsv < tree.tsv        # Read from stdin
  nestedset rebuild tree.json -o out.csv     # Write to a file
  nestedset rebuild tree.csv --complement    # Wrap nodes in classifications
  nestedset check tree.csv                   # Validate only

Input fields:
  id, label, parent (empty/null for the root), leaf (optional, true/false)

Configuration:
  nestedset config path         # Show config file location
  nestedset config show         # View all settings

For detailed command help: nestedset <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"nestedset {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # rebuild command
    rebuild_parser = subparsers.add_parser(
        "rebuild",
        help="Build the nested set and write indexed records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output columns:
  pid, classification, classification_label, classification_origin,
  classification_parent, parent_id, leaf, lft, rgt, count

Shared branches (a non-leaf id listed under several parents) are
duplicated; the copies get ids like "id__1" and keep the original id in
classification_origin.
""",
    )
    _add_input_arguments(rebuild_parser)
    rebuild_parser.add_argument(
        "-t",
        "--to",
        dest="to_format",
        choices=FORMAT_CHOICES,
        help="Output format (default: output extension, then input format)",
    )
    rebuild_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: stdout)",
        metavar="PATH",
    )
    rebuild_parser.add_argument(
        "--complement",
        action="store_true",
        help="Wrap every node in a classification node",
    )
    rebuild_parser.add_argument(
        "--sort",
        action="store_true",
        help="Number nodes in depth-first order and sort output by pid",
    )
    rebuild_parser.add_argument(
        "--max-passes",
        type=int,
        help="Maximum DAG unfolding passes (default: 8)",
        metavar="N",
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Validate records (root, parents, cycles, DAG shape)",
    )
    _add_input_arguments(check_parser)
    check_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output the summary as JSON",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("show", help="Show effective configuration as TOML")
    config_subparsers.add_parser("path", help="Show configuration file location")

    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="File to process (default: stdin)",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="from_format",
        choices=FORMAT_CHOICES,
        help="Input format (default: input extension)",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install nestedset[completion]
    # Then activate: eval "$(register-python-argcomplete nestedset)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "rebuild":
            return rebuild.run(args)
        elif args.command == "check":
            return check.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1
