"""
nestedset.core - Node model, structural transforms and nested set indexing
"""

from nestedset.core.complement import complement
from nestedset.core.dag import is_dag, unfold, unfold_until_tree
from nestedset.core.errors import (
    CycleError,
    MultipleRootsError,
    NestedSetError,
    NotATreeError,
    ParentNodeNotFoundError,
    RootNotFoundError,
    UnfoldLimitError,
)
from nestedset.core.indexer import index
from nestedset.core.models import Node
from nestedset.core.pipeline import RebuildResult, rebuild
from nestedset.core.relations import (
    Relations,
    build_children_index,
    build_relations,
    check_acyclic,
    check_references,
    find_cycle,
)

__all__ = [
    "CycleError",
    "MultipleRootsError",
    "NestedSetError",
    "NotATreeError",
    "Node",
    "ParentNodeNotFoundError",
    "RebuildResult",
    "Relations",
    "RootNotFoundError",
    "UnfoldLimitError",
    "build_children_index",
    "build_relations",
    "check_acyclic",
    "check_references",
    "complement",
    "find_cycle",
    "index",
    "is_dag",
    "rebuild",
    "unfold",
    "unfold_until_tree",
]
