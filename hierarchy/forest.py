"""Flat depth-first encoding of an ordered forest.

A forest is stored as parallel sequences of node IDs and depths in DFS
pre-order. Parent/child links are implicit: a node's parent is the nearest
preceding node whose depth is one less, and depth-0 nodes are roots.

Example::

    node ids: 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11
    depths:   0, 1, 2, 3, 1, 0, 1, 0, 1, 1, 2

encodes::

    1
    - 2
    - - 3
    - - - 4
    - 5
    6
    - 7
    8
    - 9
    - 10
    - - 11

Depth invariants:

- the first node has depth 0;
- after a node of depth ``D`` comes either ``D + 1`` (its first child),
  ``D`` (its next sibling) or any ``d < D`` (an unrelated node).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Sequence


class HierarchyError(ValueError):
    """Raised when forest input is malformed."""


class InvalidHierarchyError(HierarchyError):
    """Raised when a record breaks the depth encoding.

    ``index`` is the position of the offending record.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class Hierarchy(ABC):
    """Read-only view over a flat (node_id, depth) forest."""

    @abstractmethod
    def size(self) -> int:
        """Number of nodes in the forest."""

    @abstractmethod
    def node_id(self, index: int) -> int:
        """ID of the node at *index*; its depth is ``depth(index)``."""

    @abstractmethod
    def depth(self, index: int) -> int:
        """Depth of the node at *index*; its ID is ``node_id(index)``."""

    def __len__(self) -> int:
        return self.size()

    def records(self) -> Iterator[tuple[int, int]]:
        """Yield ``(node_id, depth)`` pairs in traversal order."""
        for i in range(self.size()):
            yield self.node_id(i), self.depth(i)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return self.records()

    def format_string(self) -> str:
        """Render as ``[id:depth, id:depth, ...]`` for diagnostics and tests."""
        return "[" + ", ".join(f"{i}:{d}" for i, d in self.records()) + "]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hierarchy):
            return NotImplemented
        return self.size() == other.size() and list(self.records()) == list(other.records())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.format_string()})"


class ArrayHierarchy(Hierarchy):
    """Tuple-backed forest. Inputs are copied, so the instance never changes.

    Parameters
    ----------
    node_ids:
        Node IDs in DFS order.
    depths:
        Depth for each node ID. Not validated here; see
        :mod:`hierarchy.validate`.
    """

    def __init__(self, node_ids: Sequence[int], depths: Sequence[int]) -> None:
        ids = tuple(node_ids)
        ds = tuple(depths)
        if len(ids) != len(ds):
            raise HierarchyError(
                f"node_ids and depths differ in length ({len(ids)} != {len(ds)})"
            )
        self._node_ids = ids
        self._depths = ds

    @classmethod
    def empty(cls) -> ArrayHierarchy:
        return cls((), ())

    @classmethod
    def from_records(cls, records: Iterable[tuple[int, int]]) -> ArrayHierarchy:
        """Build from ``(node_id, depth)`` pairs."""
        pairs = list(records)
        return cls([p[0] for p in pairs], [p[1] for p in pairs])

    def size(self) -> int:
        return len(self._depths)

    def _check_index(self, index: int) -> None:
        # Plain tuple indexing would accept negative positions.
        if not 0 <= index < len(self._depths):
            raise IndexError(
                f"index {index} out of range for hierarchy of size {len(self._depths)}"
            )

    def node_id(self, index: int) -> int:
        self._check_index(index)
        return self._node_ids[index]

    def depth(self, index: int) -> int:
        self._check_index(index)
        return self._depths[index]

    def records(self) -> Iterator[tuple[int, int]]:
        return zip(self._node_ids, self._depths)

    @property
    def node_ids(self) -> tuple[int, ...]:
        return self._node_ids

    @property
    def depths(self) -> tuple[int, ...]:
        return self._depths
