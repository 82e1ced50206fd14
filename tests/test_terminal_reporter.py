"""Tests for the terminal (Rich) reporter."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from rich.panel import Panel
from rich.table import Table

from covtree.aggregation import RootNode
from covtree.config import InputConfig
from covtree.models import CoverageCounters, RawRecord
from covtree.reporters.terminal import CLIReporter, _coverage_color, _format_counters, reporter

# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def mock_console() -> MagicMock:
    """Return a MagicMock that replaces the console."""
    return MagicMock()


@pytest.fixture
def cli_reporter(mock_console: MagicMock) -> CLIReporter:
    """Return a CLIReporter with a mocked console."""
    r = CLIReporter()
    r.console = mock_console
    return r


def _printed(mock_console: MagicMock) -> str:
    return "\n".join(str(c.args[0]) for c in mock_console.print.call_args_list if c.args)


# ── Helper function tests ───────────────────────────────────────


class TestCoverageColor:
    def test_high(self) -> None:
        assert _coverage_color(100.0) == "green"
        assert _coverage_color(80.0) == "green"

    def test_medium(self) -> None:
        assert _coverage_color(50.0) == "yellow"

    def test_low(self) -> None:
        assert _coverage_color(49.9) == "red"

    def test_undefined(self) -> None:
        assert _coverage_color(None) == "dim"


class TestFormatCounters:
    def test_includes_ratio_and_percentage(self) -> None:
        text = _format_counters(CoverageCounters(6, 5))
        assert "83.33%" in text
        assert "(5/6)" in text
        assert text.startswith("[green]")

    def test_bold(self) -> None:
        assert _format_counters(CoverageCounters(2, 0), bold=True).startswith("[bold red]")

    def test_empty(self) -> None:
        assert _format_counters(CoverageCounters()).startswith("[dim]-[/dim]")


# ── Basic messages ───────────────────────────────────────────────


class TestMessages:
    def test_success(self, cli_reporter: CLIReporter, mock_console: MagicMock) -> None:
        cli_reporter.print_success("done")
        assert "done" in mock_console.print.call_args.args[0]

    def test_error(self, cli_reporter: CLIReporter, mock_console: MagicMock) -> None:
        cli_reporter.print_error("boom")
        assert "[red]" in mock_console.print.call_args.args[0]

    def test_module_level_reporter(self) -> None:
        assert isinstance(reporter, CLIReporter)


# ── Report generation ────────────────────────────────────────────


class TestIntroduction:
    def test_lists_inputs(self, cli_reporter: CLIReporter, mock_console: MagicMock) -> None:
        inputs = [
            InputConfig(path="core.info", name="Core", prefix="/src/core"),
            InputConfig(path="web.info"),
        ]

        cli_reporter.print_introduction("Monorepo", "html", inputs)

        banner = next(c.args[0] for c in mock_console.print.call_args_list if c.args)
        assert isinstance(banner, Panel)
        assert "HTML report for 2 input(s) lcov files" in str(banner.renderable)
        output = _printed(mock_console)
        assert "Report name: [bold]'Monorepo'[/bold]" in output
        assert "Reporter: [bold]'html'[/bold]" in output
        assert "path: core.info, name: Core, prefix: /src/core" in output
        assert "path: web.info" in output

    def test_conclusion(self, cli_reporter: CLIReporter, mock_console: MagicMock) -> None:
        cli_reporter.print_conclusion("coverage-report")
        assert "Report generated at" in mock_console.print.call_args.args[0]
        assert "coverage-report" in mock_console.print.call_args.args[0]


class TestCoverageSummary:
    def test_prints_table(self, cli_reporter: CLIReporter, mock_console: MagicMock) -> None:
        root = RootNode.build(
            [
                RawRecord(path="main.cpp", lines={1: 1, 2: 0}),
                RawRecord(path="module/nested.cpp", lines={1: 1}),
            ]
        )

        cli_reporter.print_coverage_summary(root)

        mock_console.print.assert_called_once()
        table = mock_console.print.call_args.args[0]
        assert isinstance(table, Table)
        assert table.row_count == 3
        assert [column.header for column in table.columns] == [
            "Entry",
            "Lines",
            "Functions",
            "Branches",
        ]
