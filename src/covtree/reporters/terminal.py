"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from covtree.models.coverage import format_percentage

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from covtree.aggregation.base import CoverageNode
    from covtree.config import InputConfig
    from covtree.models.coverage import CoverageCounters

console = Console()


_HIGH_COVERAGE = 80.0
_MEDIUM_COVERAGE = 50.0


def _coverage_color(percentage: float | None) -> str:
    """Return a Rich color name for a coverage percentage."""
    if percentage is None:
        return "dim"
    if percentage >= _HIGH_COVERAGE:
        return "green"
    if percentage >= _MEDIUM_COVERAGE:
        return "yellow"
    return "red"


def _format_counters(counters: CoverageCounters, *, bold: bool = False) -> str:
    percentage = counters.percentage()
    color = _coverage_color(percentage)
    style = f"bold {color}" if bold else color
    return (
        f"[{style}]{format_percentage(percentage)}[/{style}] "
        f"[dim]({counters.covered_count}/{counters.count})[/dim]"
    )


class CLIReporter:
    """Rich terminal output for report generation."""

    def __init__(self) -> None:
        """Initialize the CLI reporter."""
        self.console = console

    def print_header(self, title: str) -> None:
        """Print a bold header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    # ── Report generation ──────────────────────────────────────────────

    def print_introduction(
        self, name: str, reporter_name: str, inputs: Sequence[InputConfig]
    ) -> None:
        """Print a banner describing the report about to be generated."""
        self.console.print()
        self.console.print(
            Panel(
                f"[bold white]Generating {reporter_name.upper()} report "
                f"for {len(inputs)} input(s) lcov files[/bold white]",
                border_style="cyan",
                padding=(0, 2),
            )
        )
        self.console.print(f"  Report name: [bold]'{name}'[/bold]")
        self.console.print(f"  Reporter: [bold]'{reporter_name}'[/bold]")
        self.console.print("  Inputs:")
        for item in inputs:
            details = [f"path: {item.path}"]
            if item.name is not None:
                details.append(f"name: {item.name}")
            if item.prefix is not None:
                details.append(f"prefix: {item.prefix}")
            self.console.print(f"    [dim]-[/dim] {', '.join(details)}")
        self.console.print()

    def print_conclusion(self, output: Path | str) -> None:
        """Print where the report was written."""
        self.print_success(f"Report generated at [bold]{output}[/bold]")

    def print_coverage_summary(self, report: CoverageNode) -> None:
        """Print a table with the coverage of every top-level entry of *report*."""
        table = Table(title=f"Coverage Summary: {report.name}", title_style="bold cyan")
        table.add_column("Entry", style="bold")
        table.add_column("Lines", justify="right")
        table.add_column("Functions", justify="right")
        table.add_column("Branches", justify="right")

        for child in [*report.modules, *report.files]:
            table.add_row(
                child.name,
                _format_counters(child.coverage.lines),
                _format_counters(child.coverage.functions),
                _format_counters(child.coverage.branches),
            )

        table.add_section()
        table.add_row(
            "[bold]Overall[/bold]",
            _format_counters(report.coverage.lines, bold=True),
            _format_counters(report.coverage.functions, bold=True),
            _format_counters(report.coverage.branches, bold=True),
        )

        self.console.print(table)


reporter = CLIReporter()
