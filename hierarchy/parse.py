"""Text and YAML forms of flat forests.

Three input forms are supported:

- pairs: ``[1:0, 2:1, 3:0]``, the same text ``format_string()`` produces;
- outline: one node per line, depth given by the number of leading
  markers (``- - 3`` is node 3 at depth 2);
- document: a YAML/JSON mapping ``{ids: [...], depths: [...]}`` or a list
  of ``[id, depth]`` pairs.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from hierarchy.forest import ArrayHierarchy, Hierarchy, HierarchyError


class ParseError(HierarchyError):
    """Raised when forest text cannot be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


# Matches one "id:depth" item, e.g. "10:2" or "-4:0"
PAIR_RE = re.compile(r'^\s*(-?\d+)\s*:\s*(-?\d+)\s*$')

FORMATS = ("auto", "pairs", "outline", "yaml")

_DOCUMENT_SUFFIXES = {".yaml", ".yml", ".json"}
_OUTLINE_SUFFIXES = {".txt", ".outline"}


def parse_pairs(text: str) -> ArrayHierarchy:
    """Parse ``[id:depth, ...]``. Brackets are optional; ``[]`` is empty."""
    body = text.strip()
    if body.startswith("["):
        if not body.endswith("]"):
            raise ParseError("unterminated '[' in pair list")
        body = body[1:-1]
    if not body.strip():
        return ArrayHierarchy.empty()

    records: list[tuple[int, int]] = []
    for item in body.split(","):
        m = PAIR_RE.match(item)
        if not m:
            raise ParseError(f"expected 'id:depth', got {item.strip()!r}")
        records.append((int(m.group(1)), int(m.group(2))))
    return ArrayHierarchy.from_records(records)


def parse_outline(text: str, marker: str = "-") -> ArrayHierarchy:
    """Parse the outline form. Blank lines and ``#`` comments are skipped.

    With the default ``-`` marker, negative IDs cannot be written in
    outline form; use the pair or document form for those.
    """
    if not marker or marker.isspace():
        raise ValueError("outline marker must be a non-blank string")

    records: list[tuple[int, int]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        depth = 0
        while line.startswith(marker):
            depth += 1
            line = line[len(marker):].lstrip()

        try:
            node_id = int(line)
        except ValueError:
            raise ParseError(f"expected a node id, got {line!r}", lineno) from None
        records.append((node_id, depth))

    return ArrayHierarchy.from_records(records)


def format_outline(hierarchy: Hierarchy, marker: str = "-") -> str:
    """Render *hierarchy* in outline form, one node per line.

    Raises ``ParseError`` for an ID whose text starts with *marker*, since
    it would read back as an extra depth level.
    """
    lines = []
    for node_id, depth in hierarchy.records():
        if str(node_id).startswith(marker):
            raise ParseError(
                f"node id {node_id} cannot be written in outline form with marker {marker!r}"
            )
        prefix = (marker + " ") * depth
        lines.append(f"{prefix}{node_id}")
    return "\n".join(lines)


def _as_int(value: Any, what: str) -> int:
    # bool is an int subclass; "true" in YAML is not a node id.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{what} must be an integer, got {value!r}")
    return value


def parse_document(text: str) -> ArrayHierarchy:
    """Parse a YAML (or JSON) document into a forest.

    Accepts ``{ids: [...], depths: [...]}`` or ``[[id, depth], ...]``.
    An empty document is the empty forest.
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"invalid YAML: {exc}") from exc

    if raw is None:
        return ArrayHierarchy.empty()

    if isinstance(raw, dict):
        missing = {"ids", "depths"} - set(raw.keys())
        if missing:
            raise ParseError(f"document missing required keys: {sorted(missing)}")
        ids = [] if raw["ids"] is None else raw["ids"]
        depths = [] if raw["depths"] is None else raw["depths"]
        if not isinstance(ids, list) or not isinstance(depths, list):
            raise ParseError("'ids' and 'depths' must be lists")
        return ArrayHierarchy(
            [_as_int(v, "id") for v in ids],
            [_as_int(v, "depth") for v in depths],
        )

    if isinstance(raw, list):
        records: list[tuple[int, int]] = []
        for item in raw:
            if not isinstance(item, list) or len(item) != 2:
                raise ParseError(f"expected [id, depth] pair, got {item!r}")
            records.append((_as_int(item[0], "id"), _as_int(item[1], "depth")))
        return ArrayHierarchy.from_records(records)

    raise ParseError(f"document must be a mapping or a list, got {type(raw).__name__}")


def dump_document(hierarchy: Hierarchy) -> str:
    """Render *hierarchy* as a YAML mapping of ids and depths."""
    data = {
        "ids": [i for i, _ in hierarchy.records()],
        "depths": [d for _, d in hierarchy.records()],
    }
    return yaml.safe_dump(data, default_flow_style=None, sort_keys=False)


def detect_format(path: Path, text: str) -> str:
    """Guess the form of *text*: by file suffix first, then by content."""
    suffix = path.suffix.lower()
    if suffix in _DOCUMENT_SUFFIXES:
        return "yaml"
    if suffix in _OUTLINE_SUFFIXES:
        return "outline"

    stripped = text.lstrip()
    if stripped.startswith("["):
        return "pairs"
    if stripped.startswith("{") or re.match(r'^(ids|depths)\s*:', stripped):
        return "yaml"
    return "outline"


def parse_text(text: str, fmt: str, marker: str = "-") -> ArrayHierarchy:
    """Parse *text* in the given explicit form."""
    if fmt == "pairs":
        return parse_pairs(text)
    if fmt == "outline":
        return parse_outline(text, marker)
    if fmt == "yaml":
        return parse_document(text)
    raise ValueError(f"Unknown format '{fmt}'. Expected one of: {', '.join(FORMATS[1:])}")


def read_hierarchy(path: Path, fmt: str = "auto", marker: str = "-") -> ArrayHierarchy:
    """Read a forest from *path*. ``fmt="auto"`` uses :func:`detect_format`."""
    path = Path(path)
    try:
        text = path.read_text()
    except UnicodeDecodeError as exc:
        raise ParseError(f"not valid UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise ParseError(f"cannot read file: {exc}") from exc
    if fmt == "auto":
        fmt = detect_format(path, text)
    return parse_text(text, fmt, marker)


def format_hierarchy(hierarchy: Hierarchy, fmt: str, marker: str = "-") -> str:
    """Render *hierarchy* in the given output form."""
    if fmt == "pairs":
        return hierarchy.format_string()
    if fmt == "outline":
        return format_outline(hierarchy, marker)
    if fmt == "yaml":
        return dump_document(hierarchy).rstrip("\n")
    raise ValueError(f"Unknown format '{fmt}'. Expected one of: {', '.join(FORMATS[1:])}")
