"""Ancestor-closed filtering of flat depth-first forests.

A forest is stored as parallel node-ID and depth sequences in DFS order
(see :mod:`hierarchy.forest`). ``filter_hierarchy()`` drops nodes that fail
a predicate, together with their subtrees.
"""

from hierarchy.filter import filter_hierarchy
from hierarchy.forest import (
    ArrayHierarchy,
    Hierarchy,
    HierarchyError,
    InvalidHierarchyError,
)

__all__ = [
    "ArrayHierarchy",
    "Hierarchy",
    "HierarchyError",
    "InvalidHierarchyError",
    "filter_hierarchy",
]
