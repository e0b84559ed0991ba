"""CLI entry point for hierarchy."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from hierarchy.parse import FORMATS

OUTPUT_CHOICES = click.Choice(list(FORMATS[1:]))


def _project_root_option(func):
    return click.option(
        "--project-root",
        type=click.Path(exists=True, file_okay=False, resolve_path=True),
        default=".",
        help="Directory holding .hierarchy/config.yaml (default: cwd).",
    )(func)


def _input_options(func):
    func = click.option(
        "--input-format",
        type=click.Choice(list(FORMATS)),
        default="auto",
        help="Form of INPUT (default: detect from suffix and content).",
    )(func)
    return click.argument(
        "input_path",
        metavar="INPUT",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(func)


def _load(project_root: str) -> dict:
    from hierarchy.config import ConfigError, load_config

    try:
        return load_config(Path(project_root))
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _setup_logging(config: dict, verbose: bool) -> None:
    level = "DEBUG" if verbose else config["logging"]["level"].upper()
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _read(input_path: Path, input_format: str, marker: str):
    from hierarchy.forest import HierarchyError
    from hierarchy.parse import read_hierarchy

    try:
        return read_hierarchy(input_path, input_format, marker)
    except HierarchyError as exc:
        raise click.ClickException(f"{input_path}: {exc}") from exc


def _render(hierarchy, fmt: str, marker: str) -> str:
    from hierarchy.forest import HierarchyError
    from hierarchy.parse import format_hierarchy

    try:
        return format_hierarchy(hierarchy, fmt, marker)
    except HierarchyError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
def cli() -> None:
    """Hierarchy: prune flat depth-first forests by node predicate."""


@cli.command()
@_project_root_option
def init(project_root: str) -> None:
    """Create .hierarchy/config.yaml with default settings."""
    from hierarchy.config import CONFIG_TEMPLATE, config_path

    path = config_path(Path(project_root))
    if path.exists():
        click.echo(f".hierarchy/config.yaml already exists at {path}")
        raise SystemExit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(CONFIG_TEMPLATE)
    click.echo(f"Created {path}")


@cli.command("filter")
@_input_options
@click.option("--exclude", "exclude", type=int, multiple=True,
              help="Reject this node ID and its subtree (repeatable).")
@click.option("--only", "only", type=int, multiple=True,
              help="Accept only these node IDs (repeatable).")
@click.option("--drop-multiples-of", type=click.IntRange(min=1), default=None,
              help="Reject node IDs divisible by N.")
@click.option("--validate/--no-validate", default=None,
              help="Lint depth invariants before filtering (default: from config).")
@click.option("--output-format", type=OUTPUT_CHOICES, default=None,
              help="Output form (default: from config).")
@click.option("--report", is_flag=True, default=False,
              help="Print a summary report instead of the bare result.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@_project_root_option
def filter_cmd(
    input_path: Path,
    input_format: str,
    exclude: tuple[int, ...],
    only: tuple[int, ...],
    drop_multiples_of: int | None,
    validate: bool | None,
    output_format: str | None,
    report: bool,
    verbose: bool,
    project_root: str,
) -> None:
    """Drop nodes failing the predicate, together with their subtrees."""
    from hierarchy.filter import filter_hierarchy
    from hierarchy.forest import HierarchyError
    from hierarchy.predicates import CountingPredicate, build_predicate

    config = _load(project_root)
    _setup_logging(config, verbose)
    marker = config["output"]["outline_marker"]
    if validate is None:
        validate = config["filter"]["validate"]
    fmt = output_format or config["output"]["format"]

    source = _read(input_path, input_format, marker)
    predicate = CountingPredicate(build_predicate(
        exclude=exclude,
        only=only or None,
        drop_multiples_of=drop_multiples_of,
    ))

    try:
        result = filter_hierarchy(source, predicate, validate=validate)
    except HierarchyError as exc:
        raise click.ClickException(f"{input_path}: {exc}") from exc

    if report:
        from hierarchy.report import render_report
        try:
            text = render_report(source, result, predicate.calls, marker)
        except HierarchyError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(text, nl=False)
    else:
        click.echo(_render(result, fmt, marker))


@cli.command()
@_input_options
@_project_root_option
def lint(input_path: Path, input_format: str, project_root: str) -> None:
    """Check INPUT against the depth invariants."""
    from hierarchy.validate import lint as run_lint

    config = _load(project_root)
    source = _read(input_path, input_format, config["output"]["outline_marker"])
    result = run_lint(source)

    if result.passed:
        click.echo("Lint: PASS (0 violations)")
    else:
        click.echo(f"Lint: FAIL ({len(result.violations)} violations)")
        for v in result.violations:
            click.echo(f"  {v}")
        raise SystemExit(1)


@cli.command()
@_input_options
@click.option("--output-format", type=OUTPUT_CHOICES, default=None,
              help="Output form (default: from config).")
@_project_root_option
def show(input_path: Path, input_format: str, output_format: str | None, project_root: str) -> None:
    """Print INPUT in another form."""
    config = _load(project_root)
    marker = config["output"]["outline_marker"]
    source = _read(input_path, input_format, marker)
    click.echo(_render(source, output_format or config["output"]["format"], marker))
