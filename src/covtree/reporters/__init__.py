"""Console reporters."""

from __future__ import annotations

from covtree.reporters.terminal import CLIReporter, reporter

__all__ = ["CLIReporter", "reporter"]
