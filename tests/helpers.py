"""Test helpers for building node collections and checking nested sets.

Factories keep test data compact; the checkers verify nested-set
properties through observable output only.
"""

from __future__ import annotations

from nestedset.core.models import Node


def make_node(
    identity: str,
    parent: str | None = None,
    leaf: bool = False,
    label: str | None = None,
) -> Node:
    """Factory for a raw (unindexed) node; label defaults to identity."""
    return Node(
        identity=identity,
        label=identity if label is None else label,
        parent_identity=parent,
        is_leaf=leaf,
    )


def make_nodes(*rows: tuple) -> list[Node]:
    """Build nodes from (identity, parent[, leaf]) tuples."""
    return [make_node(*row) for row in rows]


def find(nodes: list[Node], identity: str) -> Node:
    """Return the single node with the given identity."""
    matches = [node for node in nodes if node.identity == identity]
    assert len(matches) == 1, f"expected one {identity!r}, found {len(matches)}"
    return matches[0]


def descendants(nodes: list[Node], node: Node) -> int:
    """Count descendants by following parent_position_id links."""
    children: dict[int, list[Node]] = {}
    for other in nodes:
        if other.parent_position_id is not None:
            children.setdefault(other.parent_position_id, []).append(other)

    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        for child in children.get(current.position_id, []):
            count += 1
            stack.append(child)
    return count


def assert_nested_set(nodes: list[Node]) -> None:
    """Assert every nested-set invariant on an indexed collection."""
    by_pid = {node.position_id: node for node in nodes}
    assert sorted(by_pid) == list(range(1, len(nodes) + 1))

    roots = [node for node in nodes if node.parent_position_id is None]
    assert len(roots) == 1
    assert roots[0].left == 1
    assert roots[0].right == 2 * len(nodes)

    children: dict[int, list[Node]] = {}
    for node in nodes:
        assert node.left < node.right
        assert (node.right - node.left) % 2 == 1
        if node.is_leaf:
            assert node.right == node.left + 1
            assert node.child_count == 0
        if node.parent_position_id is not None:
            parent = by_pid[node.parent_position_id]
            assert parent.left < node.left
            assert node.right < parent.right
            children.setdefault(parent.position_id, []).append(node)

    for node in nodes:
        kids = sorted(children.get(node.position_id, []), key=lambda n: n.left)
        assert node.child_count == len(kids)
        for before, after in zip(kids, kids[1:]):
            assert before.right < after.left
        assert node.descendant_count == descendants(nodes, node)
