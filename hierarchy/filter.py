"""Ancestor-closed filtering of flat forests.

A node survives iff its ID passes the predicate and all of its ancestors
survive as well. Rejecting a node prunes its whole subtree, even where
descendants would pass on their own.

The input is walked once. ``kept_at_depth[d]`` records whether the most
recent node seen at depth ``d`` was kept; by the depth invariants, the last
node seen at ``d - 1`` is the parent of the current node at ``d``. Kept
nodes keep their original depth, since all their ancestors are kept too.

Time: O(n). Space: O(max depth) auxiliary, plus the output.
"""

from __future__ import annotations

import logging

from hierarchy.forest import ArrayHierarchy, Hierarchy, InvalidHierarchyError
from hierarchy.predicates import NodePredicate
from hierarchy.validate import check_hierarchy

log = logging.getLogger(__name__)


def filter_hierarchy(
    hierarchy: Hierarchy,
    predicate: NodePredicate,
    *,
    validate: bool = False,
) -> ArrayHierarchy:
    """Return a new forest with the nodes that pass *predicate* along with all
    their ancestors.

    Parameters
    ----------
    hierarchy:
        Input forest. Never modified.
    predicate:
        Called with a node ID, at most once per node, and only for nodes
        whose parent was kept. Exceptions propagate unchanged.
    validate:
        Check the depth invariants of the whole input before filtering.
        Without it only negative depths are rejected, and other malformed
        input gives unspecified output.

    Raises
    ------
    InvalidHierarchyError
        On a negative depth, or on any invariant violation when
        *validate* is set. No partial result is returned.
    """
    if validate:
        check_hierarchy(hierarchy)

    n = hierarchy.size()
    if n == 0:
        return ArrayHierarchy.empty()

    kept_at_depth: list[bool] = []
    out_ids: list[int] = []
    out_depths: list[int] = []

    for i in range(n):
        d = hierarchy.depth(i)
        if d < 0:
            raise InvalidHierarchyError(f"Negative depth {d} at index {i}", i)

        if d >= len(kept_at_depth):
            # A level never seen before reads as a pruned parent.
            kept_at_depth.extend([False] * (d + 1 - len(kept_at_depth)))

        parent_kept = True if d == 0 else kept_at_depth[d - 1]
        node_id = hierarchy.node_id(i)
        keep = parent_kept and bool(predicate(node_id))
        kept_at_depth[d] = keep

        if keep:
            out_ids.append(node_id)
            out_depths.append(d)

    log.debug(
        "Filtered hierarchy: kept %d of %d nodes (max depth %d)",
        len(out_ids), n, len(kept_at_depth) - 1,
    )
    return ArrayHierarchy(out_ids, out_depths)
