"""Load and validate .hierarchy/config.yaml."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml


# Default config values
DEFAULTS: dict[str, Any] = {
    "filter": {
        "validate": False,
    },
    "output": {
        "format": "pairs",
        "outline_marker": "-",
    },
    "logging": {
        "level": "WARNING",
    },
}

OUTPUT_FORMATS = ("pairs", "outline", "yaml")

# Default config template, written by `hierarchy init`
CONFIG_TEMPLATE = """\
filter:
  validate: false  # lint depth invariants before filtering

output:
  format: pairs  # pairs | outline | yaml
  outline_marker: "-"

logging:
  level: WARNING
"""


class ConfigError(Exception):
    """Raised when config is invalid or unreadable."""


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base recursively. Override wins on conflicts."""
    result = copy.deepcopy(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate(config: dict) -> None:
    """Validate field types and enumerated values in config."""
    for section in ("filter", "output", "logging"):
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"'{section}' must be a mapping")

    if not isinstance(config["filter"].get("validate"), bool):
        raise ConfigError("'filter.validate' must be true or false")

    fmt = config["output"].get("format")
    if fmt not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unsupported output format '{fmt}'. Built-in: {', '.join(OUTPUT_FORMATS)}."
        )

    marker = config["output"].get("outline_marker")
    if not isinstance(marker, str) or not marker.strip():
        raise ConfigError("'output.outline_marker' must be a non-blank string")

    level = config["logging"].get("level")
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(f"Unknown logging level '{level}'")


def config_path(project_root: Path) -> Path:
    return Path(project_root) / ".hierarchy" / "config.yaml"


def load_config(project_root: Path | None = None) -> dict:
    """Load config from .hierarchy/config.yaml under project_root.

    Falls back to cwd if project_root is None. A missing file yields the
    defaults; otherwise the file is merged over DEFAULTS so callers always
    get a full config dict.
    """
    root = Path(project_root) if project_root else Path.cwd()
    path = config_path(root)

    if not path.exists():
        return copy.deepcopy(DEFAULTS)

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config is not valid YAML: {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(raw).__name__}")

    config = _deep_merge(DEFAULTS, raw)
    _validate(config)
    return config
