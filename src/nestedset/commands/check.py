"""
nestedset.commands.check - Validate records without writing a nested set.

Reports the root, whether the records form a DAG, and how many nodes the
unfolded tree would have.
"""

import argparse
import json
import sys
from typing import Any, Dict

from nestedset.commands.common import load_configuration, load_nodes
from nestedset.core.dag import is_dag, unfold_until_tree
from nestedset.core.errors import NestedSetError
from nestedset.core.relations import build_relations, check_acyclic, check_references


def run(args: argparse.Namespace) -> int:
    """
    Run the check command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 if the records are valid, 1 otherwise)
    """
    config = load_configuration(args)
    if config is None:
        return 1

    settings = config.get("rebuild", {})
    summary: Dict[str, Any] = {"valid": False}

    try:
        nodes = load_nodes(args, config)
        summary["nodes"] = len(nodes)

        relations = build_relations(nodes)
        check_references(nodes, relations)
        check_acyclic(nodes)
        summary["root"] = nodes[relations.root].identity

        summary["dag"] = is_dag(nodes)
        tree, passes = unfold_until_tree(
            nodes,
            max_passes=int(settings.get("max_unfold_passes", 8)),
            separator=settings.get("duplicate_separator", "__"),
        )
        summary["unfolded_nodes"] = len(tree)
        summary["passes"] = passes
        summary["valid"] = True
    except NestedSetError as e:
        summary["error"] = str(e)
    except OSError as e:
        summary["error"] = f"Cannot read input: {e}"

    if args.json:
        print(json.dumps(summary, indent=2))
    elif summary["valid"]:
        if not getattr(args, "quiet", False):
            print(f"Nodes:  {summary['nodes']}")
            print(f"Root:   {summary['root']}")
            if summary["dag"]:
                print(
                    f"Shape:  DAG (unfolds to {summary['unfolded_nodes']} nodes "
                    f"in {summary['passes']} pass(es))"
                )
            else:
                print("Shape:  tree")
    else:
        print(f"Error: {summary['error']}", file=sys.stderr)

    return 0 if summary["valid"] else 1
