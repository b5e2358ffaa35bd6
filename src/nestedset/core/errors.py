"""
nestedset.core.errors - Error kinds raised by the core transforms.

Every error is terminal: the first violation found is raised and no
partial result is produced.
"""

from typing import List


class NestedSetError(Exception):
    """Base class for all errors raised by nestedset."""


class RootNotFoundError(NestedSetError, ValueError):
    """No node lacks a parent identity."""

    def __init__(self) -> None:
        super().__init__(
            'Root node not found. Remove "parent" from the root node or set it to null'
        )


class MultipleRootsError(NestedSetError, ValueError):
    """More than one node lacks a parent identity."""

    def __init__(self, identities: List[str]) -> None:
        self.identities = list(identities)
        super().__init__(
            f"Multiple nodes without a parent were found: {', '.join(self.identities)}"
        )


class ParentNodeNotFoundError(NestedSetError, KeyError):
    """A node references a parent identity with no matching non-leaf node."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(identity)

    def __str__(self) -> str:
        return f"Parent node not found: {self.identity}"


class CycleError(NestedSetError, ValueError):
    """The parent chain of some node loops back onto itself."""

    def __init__(self, path: List[str]) -> None:
        self.path = list(path)
        super().__init__(f"Cycle detected: {' -> '.join(self.path)}")


class UnfoldLimitError(NestedSetError, ValueError):
    """Input is still a DAG after the maximum number of unfolding passes."""

    def __init__(self, passes: int) -> None:
        self.passes = passes
        super().__init__(f"Input is still a DAG after {passes} unfolding passes")


class NotATreeError(NestedSetError, ValueError):
    """A non-leaf identity occurs more than once where a tree is required."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(
            f"Input is still a DAG: non-leaf node {identity!r} occurs more than once "
            "(unfold it before indexing)"
        )
