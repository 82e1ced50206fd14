"""covtree CLI — top-level command group."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.logging import RichHandler

from covtree import __version__
from covtree.aggregation.base import DEFAULT_REPORT_NAME
from covtree.config import (
    REPORTERS,
    InputConfig,
    ReportConfig,
    load_config,
    save_config,
    validate_config,
)
from covtree.errors import CovtreeError
from covtree.operations import run_report
from covtree.reporters.terminal import reporter

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=reporter.console, rich_tracebacks=verbose)],
        force=True,
    )


def parse_input_spec(value: str) -> InputConfig:
    """Parse ``PATH``, ``NAME=PATH`` or ``NAME:PREFIX=PATH`` into an input.

    Raises:
        click.BadParameter: If the path part is empty.
    """
    name: str | None = None
    prefix: str | None = None
    path = value
    if "=" in value:
        label, _, path = value.partition("=")
        if ":" in label:
            name, _, prefix = label.partition(":")
        else:
            name = label
        name = name or None
    if not path:
        raise click.BadParameter(f"missing tracefile path in {value!r}", param_hint="--input")
    return InputConfig(path=path, name=name, prefix=prefix)


def _build_config(
    output: str, name: str, reporter_name: str, inputs: tuple[str, ...]
) -> ReportConfig:
    return ReportConfig(
        output=output,
        name=name,
        inputs=[parse_input_spec(item) for item in inputs],
        reporter=reporter_name,
    )


def _run(config: ReportConfig) -> None:
    errors = validate_config(config)
    if errors:
        reporter.print_error(f"Found {len(errors)} configuration error(s):")
        for idx, error in enumerate(errors, start=1):
            reporter.console.print(f"  {idx}. [red]{error}[/red]")
        raise click.Abort

    reporter.print_introduction(config.name, config.reporter, config.inputs)
    try:
        root = run_report(config)
    except (CovtreeError, OSError) as e:
        reporter.print_error(f"Failed to generate report: {e}")
        raise click.Abort from e

    reporter.print_coverage_summary(root)
    reporter.print_conclusion(config.output)


_report_options = [
    click.option(
        "--output",
        "-o",
        required=True,
        type=click.Path(file_okay=False),
        help="Directory the report is written into.",
    ),
    click.option(
        "--name", "-n", default=DEFAULT_REPORT_NAME, show_default=True, help="Report title."
    ),
    click.option(
        "--reporter",
        "-r",
        "reporter_name",
        default="html",
        show_default=True,
        type=click.Choice(REPORTERS),
        help="Output format.",
    ),
    click.option(
        "--input",
        "-i",
        "inputs",
        required=True,
        multiple=True,
        help="LCOV tracefile as PATH, NAME=PATH or NAME:PREFIX=PATH. Repeatable.",
    ),
]


def _with_report_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_report_options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs.")
@click.version_option(version=__version__, prog_name="covtree")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """covtree — hierarchical HTML and text reports from LCOV coverage data."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose=verbose)


@cli.command("report")
@_with_report_options
def report_command(output: str, name: str, reporter_name: str, inputs: tuple[str, ...]) -> None:
    """Generate a coverage report from one or more LCOV tracefiles.

    Example:
      covtree report -o coverage-report -i core:/src/core=core.info -i web.info
    """
    _run(_build_config(output, name, reporter_name, inputs))


@cli.command("to-file")
@click.argument("config_file", type=click.Path(dir_okay=False))
@_with_report_options
@click.option("--yes", "-y", is_flag=True, help="Overwrite an existing file without asking.")
def to_file_command(
    config_file: str,
    output: str,
    name: str,
    reporter_name: str,
    inputs: tuple[str, ...],
    *,
    yes: bool,
) -> None:
    """Save report options to a YAML configuration file.

    Example:
      covtree to-file covtree.yml -o coverage-report -i lcov.info
    """
    config = _build_config(output, name, reporter_name, inputs)
    path = Path(config_file)
    if path.exists() and not yes and not click.confirm(f"{path} already exists. Overwrite it?"):
        reporter.print_warning("Aborting, configuration not saved")
        return

    try:
        save_config(config, path)
    except OSError as e:
        reporter.print_error(f"Failed to save configuration: {e}")
        raise click.Abort from e
    reporter.print_success(f"Configuration saved to {path}")


@cli.command("from-file")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def from_file_command(config_file: str) -> None:
    """Generate the report described by a YAML configuration file.

    Example:
      covtree from-file covtree.yml
    """
    try:
        config = load_config(config_file)
    except (CovtreeError, OSError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e
    _run(config)
