"""Depth-invariant linter for flat forests.

Main entry point: ``lint()`` checks a forest against the depth encoding
rules and returns a ``LintResult`` with pass/fail and a list of violations.
``check_hierarchy()`` is the raising variant used by the filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hierarchy.forest import Hierarchy, InvalidHierarchyError


@dataclass
class Violation:
    """A single depth-encoding violation."""

    index: int
    message: str

    def __str__(self) -> str:
        return f"[{self.index}] {self.message}"


@dataclass
class LintResult:
    """Result of linting a forest."""

    passed: bool
    violations: list[Violation] = field(default_factory=list)

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"LintResult({status}, {len(self.violations)} violations)"


def validate_depths(hierarchy: Hierarchy) -> list[Violation]:
    """Check the depth sequence of *hierarchy*.

    Reports, in order of position:

    - negative depths;
    - a first record whose depth is not 0;
    - a record deeper than its predecessor by more than one level.

    A record with a negative depth is not also compared against its
    neighbours.
    """
    violations: list[Violation] = []
    prev: int | None = None

    for i, (node_id, d) in enumerate(hierarchy.records()):
        if d < 0:
            violations.append(Violation(i, f"Node {node_id} has negative depth {d}"))
            prev = None
            continue
        if i == 0 and d != 0:
            violations.append(Violation(i, f"First node {node_id} has depth {d}, expected 0"))
        elif prev is not None and d > prev + 1:
            violations.append(Violation(
                i,
                f"Node {node_id} at depth {d} follows depth {prev} "
                f"(may deepen by at most one level)",
            ))
        prev = d

    return violations


def lint(hierarchy: Hierarchy) -> LintResult:
    """Validate *hierarchy* and wrap the outcome in a ``LintResult``."""
    violations = validate_depths(hierarchy)
    return LintResult(passed=len(violations) == 0, violations=violations)


def check_hierarchy(hierarchy: Hierarchy) -> None:
    """Raise ``InvalidHierarchyError`` for the first violation, if any."""
    violations = validate_depths(hierarchy)
    if violations:
        first = violations[0]
        raise InvalidHierarchyError(
            f"Invalid hierarchy at index {first.index}: {first.message}",
            first.index,
        )
