"""Composable node-ID predicates for :func:`hierarchy.filter.filter_hierarchy`."""

from __future__ import annotations

from typing import Callable, Iterable

NodePredicate = Callable[[int], bool]


def accept_all(node_id: int) -> bool:
    return True


def exclude_ids(ids: Iterable[int]) -> NodePredicate:
    """Reject the given IDs, accept everything else."""
    rejected = frozenset(ids)
    return lambda node_id: node_id not in rejected


def only_ids(ids: Iterable[int]) -> NodePredicate:
    """Accept only the given IDs."""
    accepted = frozenset(ids)
    return lambda node_id: node_id in accepted


def not_multiple_of(n: int) -> NodePredicate:
    """Reject IDs divisible by *n*."""
    if n < 1:
        raise ValueError(f"divisor must be >= 1, got {n}")
    return lambda node_id: node_id % n != 0


def all_of(*predicates: NodePredicate) -> NodePredicate:
    """Accept an ID only if every predicate does. Short-circuits in order."""
    if not predicates:
        return accept_all
    if len(predicates) == 1:
        return predicates[0]
    return lambda node_id: all(p(node_id) for p in predicates)


def build_predicate(
    exclude: Iterable[int] = (),
    only: Iterable[int] | None = None,
    drop_multiples_of: int | None = None,
) -> NodePredicate:
    """Compose the CLI filter options into one predicate.

    No options at all yields :func:`accept_all`.
    """
    parts: list[NodePredicate] = []
    excluded = list(exclude)
    if excluded:
        parts.append(exclude_ids(excluded))
    if only is not None:
        parts.append(only_ids(only))
    if drop_multiples_of is not None:
        parts.append(not_multiple_of(drop_multiples_of))
    return all_of(*parts)


class CountingPredicate:
    """Wrap a predicate and record which IDs it was asked about.

    ``calls`` is the total number of invocations; ``seen`` lists the IDs in
    call order.
    """

    def __init__(self, predicate: NodePredicate) -> None:
        self._predicate = predicate
        self.seen: list[int] = []

    def __call__(self, node_id: int) -> bool:
        self.seen.append(node_id)
        return self._predicate(node_id)

    @property
    def calls(self) -> int:
        return len(self.seen)
