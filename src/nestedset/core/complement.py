"""Leaf complementing.

Inserts a synthetic "classification" wrapper above every node so that
structural nodes and terminal records live in separate layers:

    Clothing                c__Clothing
    └── Men's       =>      ├── Clothing (leaf)
                            └── c__Men's
                                └── Men's (leaf)
"""

from __future__ import annotations

from typing import Sequence

from nestedset.core.models import Node
from nestedset.core.relations import build_relations

DEFAULT_PREFIX = "c__"


def complement(nodes: Sequence[Node], prefix: str = DEFAULT_PREFIX) -> list[Node]:
    """Wrap every node in a non-leaf classification node.

    For each node N a wrapper ``prefix + N.identity`` is emitted under
    ``prefix + N.parent_identity`` (no parent for the root), followed by N
    itself as a leaf child of its wrapper. A pair is emitted only once per
    wrapper (identity, parent identity) key, so repeated records under the
    same parent collapse into one wrapper. The root's pair comes first.

    Args:
        nodes: Ordered node collection (not modified).
        prefix: Prepended to identities to name the wrappers.

    Returns:
        New collection of wrapper/leaf pairs.

    Raises:
        RootNotFoundError, MultipleRootsError: Invalid root.
    """
    relations = build_relations(nodes)
    order = [relations.root] + [i for i in range(len(nodes)) if i != relations.root]

    result: list[Node] = []
    emitted: set[tuple[str, str | None]] = set()

    for i in order:
        node = nodes[i]
        wrapper_id = f"{prefix}{node.identity}"
        wrapper_parent = (
            None if node.parent_identity is None else f"{prefix}{node.parent_identity}"
        )

        key = (wrapper_id, wrapper_parent)
        if key in emitted:
            continue
        emitted.add(key)

        result.append(
            Node(
                identity=wrapper_id,
                label=node.label,
                parent_identity=wrapper_parent,
                is_leaf=False,
            )
        )
        result.append(node.copy(parent_identity=wrapper_id, is_leaf=True))

    return result
