"""Rebuild pipeline.

Runs the core transforms in order:

    validate -> (complement) -> unfold while DAG -> index

The input collection is never modified; every stage hands a new
collection to the next one and only the final collection is indexed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from nestedset.core.complement import DEFAULT_PREFIX, complement as complement_nodes
from nestedset.core.dag import DEFAULT_MAX_PASSES, DEFAULT_SEPARATOR, is_dag, unfold_until_tree
from nestedset.core.indexer import index
from nestedset.core.models import Node
from nestedset.core.relations import build_relations, check_acyclic, check_references


@dataclass
class RebuildResult:
    """Outcome of a full rebuild.

    Attributes:
        nodes: Indexed collection, ready for the output boundary.
        input_count: Number of records supplied.
        was_dag: True if unfolding had to run.
        passes: Number of unfolding passes run.
        complemented: True if leaf complementing ran.
    """

    nodes: list[Node] = field(default_factory=list)
    input_count: int = 0
    was_dag: bool = False
    passes: int = 0
    complemented: bool = False

    @property
    def root(self) -> Node:
        """The indexed root node."""
        return next(node for node in self.nodes if node.parent_identity is None)


def rebuild(
    nodes: Sequence[Node],
    complement: bool = False,
    sort: bool = False,
    max_passes: int = DEFAULT_MAX_PASSES,
    separator: str = DEFAULT_SEPARATOR,
    prefix: str = DEFAULT_PREFIX,
    report: Callable[[str], None] | None = None,
) -> RebuildResult:
    """Convert flat hierarchy records into an indexed nested set.

    Args:
        nodes: Raw records in input order (not modified).
        complement: Wrap every node in a classification node first.
        sort: Renumber in depth-first order and sort by position id.
        max_passes: Upper bound on unfolding passes.
        separator: Joins identity and occurrence count of duplicates.
        prefix: Prepended to identities of classification wrappers.
        report: Optional callback receiving progress messages.

    Returns:
        RebuildResult with the indexed collection.

    Raises:
        NestedSetError: The first violation found in the input.
    """

    def note(message: str) -> None:
        if report is not None:
            report(message)

    relations = build_relations(nodes)
    check_references(nodes, relations)
    check_acyclic(nodes)
    note(f"Validated {len(nodes)} nodes (root: {nodes[relations.root].identity})")

    current: Sequence[Node] = nodes
    if complement:
        current = complement_nodes(current, prefix=prefix)
        note(f"Complemented leaves: {len(nodes)} -> {len(current)} nodes")

    was_dag = is_dag(current)
    if was_dag:
        note("Shared branches found, unfolding DAG into a tree")
    tree, passes = unfold_until_tree(current, max_passes=max_passes, separator=separator)
    if passes:
        note(f"Unfolded in {passes} pass(es): {len(current)} -> {len(tree)} nodes")

    index(tree, sort=sort)
    note(f"Indexed {len(tree)} nodes")

    return RebuildResult(
        nodes=tree,
        input_count=len(nodes),
        was_dag=was_dag,
        passes=passes,
        complemented=complement,
    )
