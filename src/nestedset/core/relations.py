"""
Relation building and validation for flat hierarchy records.

Centralized functions for parent/child operations on a node collection:
- Identity lookup and root discovery
- Children index construction
- Parent reference validation
- Cycle detection

Positions (indexes into the node list) are the primary handles; identity
keyed maps are rebuilt fresh by every stage that needs them, since
transforms may change identities.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from nestedset.core.errors import (
    CycleError,
    MultipleRootsError,
    ParentNodeNotFoundError,
    RootNotFoundError,
)
from nestedset.core.models import Node


@dataclass
class Relations:
    """Identity lookup and root position of a node collection.

    Attributes:
        lookup: Non-leaf identity -> 0-based position in the collection
        root: 0-based position of the root node
    """

    lookup: Dict[str, int] = field(default_factory=dict)
    root: int = 0


# -----------------------------------------------------------------------------
# Relation Building
# -----------------------------------------------------------------------------


def build_relations(nodes: Sequence[Node]) -> Relations:
    """Build the identity lookup and locate the single root.

    Leaf nodes are left out of the lookup since they can never be parents.
    When a non-leaf identity occurs more than once (a DAG), the last
    occurrence wins; callers that care run the DAG detector first.

    Args:
        nodes: Ordered node collection

    Returns:
        Relations with the lookup and root position

    Raises:
        RootNotFoundError: No node lacks a parent identity
        MultipleRootsError: More than one node lacks a parent identity
    """
    lookup: Dict[str, int] = {}
    roots: List[int] = []

    for i, node in enumerate(nodes):
        if node.parent_identity is None:
            roots.append(i)
        if not node.is_leaf:
            lookup[node.identity] = i

    if not roots:
        raise RootNotFoundError()
    if len(roots) > 1:
        raise MultipleRootsError([nodes[i].identity for i in roots])

    return Relations(lookup=lookup, root=roots[0])


def build_children_index(nodes: Sequence[Node]) -> Dict[str, List[int]]:
    """Build parent identity -> [child positions] mapping.

    Children keep their collection order, which becomes the left-to-right
    sibling order of the nested set.

    Args:
        nodes: Ordered node collection

    Returns:
        Dict mapping each parent identity to the positions of its children
    """
    index: Dict[str, List[int]] = {}

    for i, node in enumerate(nodes):
        if node.parent_identity is None:
            continue
        index.setdefault(node.parent_identity, []).append(i)

    return index


def check_references(nodes: Sequence[Node], relations: Relations) -> None:
    """Ensure every parent identity resolves to a non-leaf node.

    Args:
        nodes: Ordered node collection
        relations: Relations built from the same collection

    Raises:
        ParentNodeNotFoundError: For the first unresolved parent identity
    """
    for node in nodes:
        parent = node.parent_identity
        if parent is not None and parent not in relations.lookup:
            raise ParentNodeNotFoundError(parent)


# -----------------------------------------------------------------------------
# Cycle Detection
# -----------------------------------------------------------------------------


_IN_PROGRESS = 1
_DONE = 2


def find_cycle(nodes: Sequence[Node]) -> Optional[List[str]]:
    """Find a loop in the parent chains. PURE - no mutation.

    Walks identity -> parent identities depth-first with an explicit
    stack, so arbitrarily deep hierarchies are safe.

    Args:
        nodes: Ordered node collection

    Returns:
        Identity path of the first cycle found (child to parent, the first
        identity repeated at the end), or None if the chains are acyclic
    """
    parents: Dict[str, List[str]] = {}
    for node in nodes:
        if node.is_leaf or node.parent_identity is None:
            continue
        parents.setdefault(node.identity, []).append(node.parent_identity)

    state: Dict[str, int] = {}

    for start in parents:
        if start in state:
            continue

        state[start] = _IN_PROGRESS
        path = [start]
        stack = [iter(parents[start])]

        while stack:
            parent = next(stack[-1], None)
            if parent is None:
                state[path.pop()] = _DONE
                stack.pop()
                continue

            seen = state.get(parent)
            if seen == _IN_PROGRESS:
                return path[path.index(parent):] + [parent]
            if seen is None:
                state[parent] = _IN_PROGRESS
                path.append(parent)
                stack.append(iter(parents.get(parent, ())))

    return None


def check_acyclic(nodes: Sequence[Node]) -> None:
    """Raise CycleError if any parent chain loops.

    Raises:
        CycleError: With the identity path of the loop
    """
    cycle = find_cycle(nodes)
    if cycle is not None:
        raise CycleError(cycle)
