"""
nestedset.core.models - Core data model for hierarchy records.

Provides the Node dataclass that flows through every transform, from the
raw record supplied by the input boundary to the indexed record handed
back to the output boundary.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class Node:
    """
    Represents one record of the hierarchy.

    Attributes:
        identity: Key of the node (unique among non-leaf nodes of a tree)
        label: Display text, independent of identity
        parent_identity: Identity of the parent, None for the root
        is_leaf: Leaves never have children and are never parent targets
        origin_identity: Pre-duplication identity, set only by unfolding
        position_id: 1-based ordinal in the final collection
        parent_position_id: position_id of the parent, None for the root
        left: Nested-set left coordinate (lft)
        right: Nested-set right coordinate (rgt)
        child_count: Number of direct children (count)
    """

    identity: str
    label: str
    parent_identity: Optional[str] = None
    is_leaf: bool = False
    origin_identity: Optional[str] = None

    # Indexing outputs, filled in by the indexer
    position_id: Optional[int] = None
    parent_position_id: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None
    child_count: Optional[int] = None

    @property
    def is_root(self) -> bool:
        """True if the node has no parent identity."""
        return self.parent_identity is None

    @property
    def is_indexed(self) -> bool:
        """True once the indexer has assigned nested-set coordinates."""
        return self.left is not None and self.right is not None

    @property
    def descendant_count(self) -> int:
        """
        Number of descendants, derived from the nested-set interval.

        Every descendant consumes two numbers inside [left, right].
        """
        if not self.is_indexed:
            raise ValueError(f"Node {self.identity!r} has not been indexed")
        return (self.right - self.left - 1) // 2

    def contains(self, other: "Node") -> bool:
        """True if other is a strict descendant of this node."""
        return self.left < other.left and other.right < self.right

    def copy(self, **changes) -> "Node":
        """Return a structural copy with indexing outputs cleared."""
        changes.setdefault("position_id", None)
        changes.setdefault("parent_position_id", None)
        changes.setdefault("left", None)
        changes.setdefault("right", None)
        changes.setdefault("child_count", None)
        return replace(self, **changes)

    def __str__(self) -> str:
        return f"{self.identity}: {self.label}"
