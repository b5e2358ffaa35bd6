"""Nested set indexing.

Assigns position ids and nested-set coordinates to a tree-shaped node
collection. Example from https://en.wikipedia.org/wiki/Nested_set_model:

    | pid | parent_id | Node          | lft | rgt |
    |-----|-----------|---------------|-----|-----|
    |   1 |           | Clothing      |   1 |  22 |
    |   2 |         1 | Men's         |   2 |   9 |
    |   3 |         1 | Women's       |  10 |  21 |
    |   4 |         2 | Suits         |   3 |   8 |
    |   5 |         4 | Slacks        |   4 |   5 |
    |   6 |         4 | Jackets       |   6 |   7 |
    |   7 |         3 | Dresses       |  11 |  16 |
    |   8 |         3 | Skirts        |  17 |  18 |
    |   9 |         3 | Blouses       |  19 |  20 |
    |  10 |         7 | Evening Gowns |  12 |  13 |
    |  11 |         7 | Sun Dresses   |  14 |  15 |
"""

from __future__ import annotations

from nestedset.core.dag import find_shared
from nestedset.core.errors import NotATreeError, ParentNodeNotFoundError, RootNotFoundError
from nestedset.core.models import Node
from nestedset.core.relations import build_children_index, build_relations, check_acyclic


def index(nodes: list[Node], sort: bool = False) -> list[Node]:
    """Number a tree-shaped collection in place.

    Position ids follow the current collection order and sibling order
    follows the order children appear in the collection. Coordinates are
    assigned depth-first from the root, starting at 1.

    Args:
        nodes: Tree-shaped node collection, mutated in place.
        sort: Renumber position ids in depth-first order and re-sort the
            collection by position id. Useful after unfolding, whose
            emission order is breadth-first.

    Returns:
        The same list, indexed.

    Raises:
        RootNotFoundError: Empty collection or no node without a parent.
        MultipleRootsError: More than one node without a parent.
        ParentNodeNotFoundError: A parent identity matches no non-leaf node.
        NotATreeError: A non-leaf identity occurs more than once.
        CycleError: Some nodes are unreachable because their parents loop.
    """
    if not nodes:
        raise RootNotFoundError()

    shared = find_shared(nodes)
    if shared is not None:
        raise NotATreeError(shared)

    relations = build_relations(nodes)
    for i, node in enumerate(nodes):
        node.position_id = i + 1

    children = build_children_index(nodes)
    _number(nodes, relations.root, children)

    if sort:
        by_left = sorted(
            (node for node in nodes if node.left is not None), key=lambda n: n.left
        )
        for rank, node in enumerate(by_left, start=1):
            node.position_id = rank

    for node in nodes:
        parent = node.parent_identity
        if parent is None:
            node.parent_position_id = None
            continue
        pos = relations.lookup.get(parent)
        if pos is None:
            raise ParentNodeNotFoundError(parent)
        node.parent_position_id = nodes[pos].position_id

    if any(node.left is None for node in nodes):
        # Every reference resolved and there is one root, so the
        # unreached nodes hang off a loop.
        check_acyclic(nodes)

    if sort:
        nodes.sort(key=lambda n: n.position_id)

    return nodes


def _number(nodes: list[Node], root: int, children: dict[str, list[int]]) -> None:
    """Assign left/right/child_count with an explicit stack.

    Each frame holds [position, pending children, last counter used]; a
    child starts at its parent's last counter + 1, and a node closes at
    its last counter + 1.
    """

    def kids(pos: int) -> list[int]:
        node = nodes[pos]
        return [] if node.is_leaf else children.get(node.identity, [])

    nodes[root].left = 1
    stack: list[list] = [[root, iter(kids(root)), 1]]

    while stack:
        frame = stack[-1]
        child = next(frame[1], None)
        if child is not None:
            nodes[child].left = frame[2] + 1
            stack.append([child, iter(kids(child)), frame[2] + 1])
            continue

        stack.pop()
        node = nodes[frame[0]]
        node.right = frame[2] + 1
        node.child_count = len(kids(frame[0]))
        if stack:
            stack[-1][2] = node.right
