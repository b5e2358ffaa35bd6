"""
nestedset - Nested set builder for hierarchical record sets

Converts flat parent/child records (trees, or DAGs with shared
substructure) into nested-set coordinates: lft, rgt and child count,
so that subtree queries become simple numeric range comparisons.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nestedset")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from nestedset.core.errors import (
    CycleError,
    MultipleRootsError,
    NestedSetError,
    NotATreeError,
    ParentNodeNotFoundError,
    RootNotFoundError,
    UnfoldLimitError,
)
from nestedset.core.models import Node
from nestedset.core.pipeline import RebuildResult, rebuild

__all__ = [
    "__version__",
    "CycleError",
    "MultipleRootsError",
    "NestedSetError",
    "NotATreeError",
    "Node",
    "ParentNodeNotFoundError",
    "RebuildResult",
    "RootNotFoundError",
    "UnfoldLimitError",
    "rebuild",
]
