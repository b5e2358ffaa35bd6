"""DAG detection and DAG-to-tree unfolding.

A collection is a DAG when some non-leaf identity occurs more than once,
i.e. a branch is referenced by more than one parent. The nested set model
needs a tree, so shared branches are duplicated once per reaching edge:

    Clothing                      Clothing
    ├── Men's                     ├── Men's
    │   └── Shoes ─┐              │   └── Shoes
    └── Women's    │      =>      │       └── Boots
        └── Shoes ─┴─ Boots       └── Women's
                                      └── Shoes__1   (origin: Shoes)
                                          └── Boots
"""

from __future__ import annotations

from collections import deque
from typing import Optional, Sequence

from nestedset.core.errors import UnfoldLimitError
from nestedset.core.models import Node
from nestedset.core.relations import (
    build_children_index,
    build_relations,
    check_acyclic,
    check_references,
)

DEFAULT_SEPARATOR = "__"
DEFAULT_MAX_PASSES = 8


def find_shared(nodes: Sequence[Node]) -> Optional[str]:
    """Return the first non-leaf identity that occurs twice, or None."""
    seen: set[str] = set()
    for node in nodes:
        if node.is_leaf:
            continue
        if node.identity in seen:
            return node.identity
        seen.add(node.identity)
    return None


def is_dag(nodes: Sequence[Node]) -> bool:
    """Check if some non-leaf identity occurs more than once.

    Args:
        nodes: Ordered node collection.

    Returns:
        True if the collection must be unfolded before indexing.
    """
    return find_shared(nodes) is not None


def unfold(nodes: Sequence[Node], separator: str = DEFAULT_SEPARATOR) -> list[Node]:
    """Rewrite a DAG into a tree with one breadth-first duplication pass.

    Every edge from an emitted parent copy to a child emits a new copy of
    the child whose parent is the emitted parent. The occurrence counter
    is keyed by the child's identity across all parents: the first copy
    keeps its identity, later non-leaf copies become
    ``identity + separator + count`` and remember where they came from in
    ``origin_identity``. Leaves always keep their identity.

    A synthesized name never reuses a non-leaf identity already present
    in the input or emitted earlier; the count is raised until the name
    is free, so a single pass always yields a tree.

    Args:
        nodes: Ordered node collection (not modified).
        separator: Inserted between identity and occurrence count.

    Returns:
        New collection in breadth-first emission order, root first.

    Raises:
        RootNotFoundError, MultipleRootsError: Invalid root.
        ParentNodeNotFoundError: Unresolved parent reference.
        CycleError: Parent chains loop, so no tree exists.
    """
    relations = build_relations(nodes)
    check_references(nodes, relations)
    check_acyclic(nodes)

    children = build_children_index(nodes)
    root = nodes[relations.root]

    result = [root.copy()]
    occurrences: dict[str, int] = {}
    taken = {node.identity for node in nodes if not node.is_leaf}

    # (emitted identity, identity to look children up by)
    queue: deque[tuple[str, str]] = deque()
    if not root.is_leaf:
        queue.append((root.identity, root.identity))

    while queue:
        emitted, original = queue.popleft()
        for pos in children.get(original, []):
            child = nodes[pos]
            count = occurrences.get(child.identity, 0)

            if count and not child.is_leaf:
                name = f"{child.identity}{separator}{count}"
                while name in taken:
                    count += 1
                    name = f"{child.identity}{separator}{count}"
                taken.add(name)
                copy = child.copy(
                    identity=name,
                    parent_identity=emitted,
                    origin_identity=child.origin_identity or child.identity,
                )
            else:
                copy = child.copy(parent_identity=emitted)
            occurrences[child.identity] = count + 1
            result.append(copy)

            if not child.is_leaf:
                queue.append((copy.identity, child.identity))

    return result


def unfold_until_tree(
    nodes: Sequence[Node],
    max_passes: int = DEFAULT_MAX_PASSES,
    separator: str = DEFAULT_SEPARATOR,
) -> tuple[list[Node], int]:
    """Unfold until the DAG detector reports a tree.

    One pass resolves any acyclic input, so passes is 0 for a tree and 1
    for a DAG. The limit guards against a collection that stays a DAG.

    Args:
        nodes: Ordered node collection (not modified).
        max_passes: Upper bound on unfolding passes.
        separator: Inserted between identity and occurrence count.

    Returns:
        Tuple of (new tree-shaped collection, number of passes run).

    Raises:
        UnfoldLimitError: Still a DAG after max_passes passes.
    """
    current = [node.copy() for node in nodes]
    passes = 0

    while is_dag(current):
        if passes >= max_passes:
            raise UnfoldLimitError(passes)
        current = unfold(current, separator)
        passes += 1

    return current, passes
