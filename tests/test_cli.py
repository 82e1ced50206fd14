"""Tests for the covtree CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import pytest
import yaml
from click.testing import CliRunner

from covtree.cli import cli, parse_input_spec
from covtree.config import InputConfig

if TYPE_CHECKING:
    from pathlib import Path


def _write_tracefile(tmp_path: Path) -> Path:
    source = tmp_path / "src" / "main.c"
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text("int main() {\n  return 0;\n}\n", encoding="utf-8")
    tracefile = tmp_path / "lcov.info"
    tracefile.write_text(
        f"TN:\nSF:{source}\nFN:1,main\nFNDA:1,main\nDA:1,1\nDA:2,1\nDA:3,0\nend_of_record\n",
        encoding="utf-8",
    )
    return tracefile


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "report" in result.output
    assert "to-file" in result.output
    assert "from-file" in result.output


# ── parse_input_spec ─────────────────────────────────────────────


class TestParseInputSpec:
    def test_path_only(self) -> None:
        assert parse_input_spec("lcov.info") == InputConfig(path="lcov.info")

    def test_name_and_path(self) -> None:
        assert parse_input_spec("core=lcov.info") == InputConfig(path="lcov.info", name="core")

    def test_name_prefix_and_path(self) -> None:
        assert parse_input_spec("core:/src/core=lcov.info") == InputConfig(
            path="lcov.info", name="core", prefix="/src/core"
        )

    def test_prefix_without_name(self) -> None:
        assert parse_input_spec(":/src=lcov.info") == InputConfig(path="lcov.info", prefix="/src")

    def test_empty_prefix(self) -> None:
        assert parse_input_spec("core:=lcov.info") == InputConfig(
            path="lcov.info", name="core", prefix=""
        )

    def test_missing_path(self) -> None:
        with pytest.raises(click.BadParameter):
            parse_input_spec("core=")


# ── report ───────────────────────────────────────────────────────


class TestReportCommand:
    def test_html(self, tmp_path: Path) -> None:
        tracefile = _write_tracefile(tmp_path)
        output = tmp_path / "report"

        runner = CliRunner()
        result = runner.invoke(cli, ["report", "-o", str(output), "-i", str(tracefile)])

        assert result.exit_code == 0, result.output
        assert (output / "index.html").is_file()
        assert (output / "main.c.html").is_file()
        assert "Report generated at" in result.output
        assert "Coverage Summary" in result.output

    def test_text(self, tmp_path: Path) -> None:
        tracefile = _write_tracefile(tmp_path)
        output = tmp_path / "report"

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["report", "-o", str(output), "-r", "text", "-n", "Core", "-i", str(tracefile)],
        )

        assert result.exit_code == 0, result.output
        summary = (output / "coverage.txt").read_text(encoding="utf-8")
        assert summary.startswith("Core:\n")

    def test_two_inputs(self, tmp_path: Path) -> None:
        first = _write_tracefile(tmp_path / "a")
        second = _write_tracefile(tmp_path / "b")
        output = tmp_path / "report"

        runner = CliRunner()
        result = runner.invoke(
            cli, ["report", "-o", str(output), "-i", str(first), "-i", f"b={second}"]
        )

        assert result.exit_code == 0, result.output
        assert (output / "src_1" / "main.c.html").is_file()
        assert (output / "src_2" / "main.c.html").is_file()

    def test_prefix_mismatch(self, tmp_path: Path) -> None:
        tracefile = _write_tracefile(tmp_path)

        runner = CliRunner()
        result = runner.invoke(
            cli, ["report", "-o", str(tmp_path / "out"), "-i", f"core:/elsewhere={tracefile}"]
        )

        assert result.exit_code != 0
        assert "Failed to generate report" in result.output
        assert not (tmp_path / "out").exists()

    def test_missing_tracefile(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli, ["report", "-o", str(tmp_path / "out"), "-i", str(tmp_path / "none.info")]
        )

        assert result.exit_code != 0
        assert "Failed to generate report" in result.output

    def test_input_required(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["report", "-o", str(tmp_path / "out")])
        assert result.exit_code == 2

    def test_unknown_reporter(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli, ["report", "-o", str(tmp_path / "out"), "-r", "pdf", "-i", "lcov.info"]
        )
        assert result.exit_code == 2


# ── to-file / from-file ──────────────────────────────────────────


class TestConfigFileCommands:
    def test_save_then_run(self, tmp_path: Path) -> None:
        tracefile = _write_tracefile(tmp_path)
        config_file = tmp_path / "covtree.yml"
        output = tmp_path / "report"

        runner = CliRunner()
        saved = runner.invoke(
            cli,
            [
                "to-file",
                str(config_file),
                "-o",
                str(output),
                "-n",
                "Core",
                "-i",
                f"core={tracefile}",
            ],
        )

        assert saved.exit_code == 0, saved.output
        assert "Configuration saved" in saved.output
        raw = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        assert raw["name"] == "Core"
        assert raw["inputs"] == [{"path": str(tracefile), "name": "core"}]
        assert not output.exists()

        result = runner.invoke(cli, ["from-file", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (output / "index.html").is_file()

    def test_existing_file_declined(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covtree.yml"
        config_file.write_text("original: true\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["to-file", str(config_file), "-o", "out", "-i", "lcov.info"], input="n\n"
        )

        assert result.exit_code == 0
        assert "Aborting" in result.output
        assert config_file.read_text(encoding="utf-8") == "original: true\n"

    def test_existing_file_overwritten_with_yes(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covtree.yml"
        config_file.write_text("original: true\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["to-file", str(config_file), "-o", "out", "-i", "lcov.info", "--yes"]
        )

        assert result.exit_code == 0, result.output
        raw = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        assert raw["output"] == "out"
        assert raw["inputs"] == [{"path": "lcov.info"}]

    def test_from_file_reports_validation_errors(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covtree.yml"
        config_file.write_text("name: Empty\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(cli, ["from-file", str(config_file)])

        assert result.exit_code != 0
        assert "configuration error(s)" in result.output
        assert "output is required" in result.output

    def test_from_file_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covtree.yml"
        config_file.write_text("inputs: [unclosed\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(cli, ["from-file", str(config_file)])

        assert result.exit_code != 0
        assert "Failed to load configuration" in result.output

    def test_from_file_missing(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["from-file", str(tmp_path / "missing.yml")])
        assert result.exit_code == 2
