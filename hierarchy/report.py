"""Jinja2 template rendering for filter reports."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from hierarchy.forest import Hierarchy
from hierarchy.parse import format_outline

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    """Create a Jinja2 environment loading from hierarchy/templates/."""
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def count_roots(hierarchy: Hierarchy) -> int:
    return sum(1 for _, d in hierarchy.records() if d == 0)


def render_report(
    before: Hierarchy,
    after: Hierarchy,
    calls: int | None = None,
    marker: str = "-",
) -> str:
    """Summarize a filter run: sizes, pruned count and the surviving outline.

    *calls* is the number of predicate invocations, when known.
    """
    template = _get_env().get_template("report.txt")
    return template.render(
        before_size=before.size(),
        before_roots=count_roots(before),
        after_size=after.size(),
        after_roots=count_roots(after),
        pruned=before.size() - after.size(),
        calls=calls,
        outline=format_outline(after, marker),
    )
