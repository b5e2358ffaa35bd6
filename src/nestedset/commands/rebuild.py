"""
nestedset.commands.rebuild - Build a nested set from flat records.

Reads records (CSV, TSV or JSON), runs the full pipeline and writes the
indexed records in the requested format.
"""

import argparse
import sys

from nestedset.commands.common import (
    input_format,
    load_configuration,
    load_nodes,
    open_output,
    output_format,
    reporter,
)
from nestedset.core.errors import NestedSetError
from nestedset.core.pipeline import rebuild
from nestedset.formats import output_names, write_nodes


def run(args: argparse.Namespace) -> int:
    """
    Run the rebuild command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for any input or validation error)
    """
    config = load_configuration(args)
    if config is None:
        return 1

    settings = config.get("rebuild", {})
    report = reporter(args)

    try:
        source = input_format(args, config)
        target = output_format(args, config, source)
        fields = config.get("output", {}).get("fields")
        output_names(fields)
        nodes = load_nodes(args, config)
        if report:
            report(f"Read {len(nodes)} records ({source.value})")

        max_passes = args.max_passes
        if max_passes is None:
            max_passes = int(settings.get("max_unfold_passes", 8))

        result = rebuild(
            nodes,
            complement=args.complement or bool(settings.get("complement", False)),
            sort=args.sort or bool(settings.get("sort", False)),
            max_passes=max_passes,
            separator=settings.get("duplicate_separator", "__"),
            prefix=settings.get("complement_prefix", "c__"),
            report=report,
        )
    except NestedSetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        with open_output(args.output) as stream:
            write_nodes(result.nodes, stream, target, fields)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    if args.output and not getattr(args, "quiet", False):
        print(f"Wrote {len(result.nodes)} nodes to {args.output}", file=sys.stderr)

    return 0
