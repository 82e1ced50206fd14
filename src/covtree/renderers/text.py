"""Plain-text single-page summary renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covtree.models.coverage import format_percentage
from covtree.renderers.base import Renderer

if TYPE_CHECKING:
    from covtree.aggregation.base import CoverageNode
    from covtree.aggregation.tree import LeafRecord
    from covtree.models.coverage import AggregatedCoverage, CoverageCounters
    from covtree.utils.file_lines import FileLinesProvider

_NAME_WIDTH = 50
_INDENT = "  "


def _render_counters(counters: CoverageCounters) -> str:
    ratio = f"{counters.covered_count}/{counters.count}"
    return f"{ratio:>10} {format_percentage(counters.percentage()):>8}"


def _render_coverage(coverage: AggregatedCoverage) -> str:
    return (
        f"Lines {_render_counters(coverage.lines)}    "
        f"Functions {_render_counters(coverage.functions)}    "
        f"Branches {_render_counters(coverage.branches)}"
    )


def _render_line(level: int, name: str, coverage: AggregatedCoverage) -> str:
    label = _INDENT * level + name
    return f"{label:<{_NAME_WIDTH}} {_render_coverage(coverage)}\n"


def _render_children(node: CoverageNode, level: int) -> str:
    output = [_render_line(level, file.name, file.coverage) for file in node.files]
    for module in node.modules:
        output.append(_render_line(level, module.name, module.coverage))
        output.append(_render_children(module, level + 1))
    return "".join(output)


def _render_header(node: CoverageNode) -> str:
    coverage = node.coverage
    return (
        f"{node.name}:\n"
        f"  - Lines     {_render_counters(coverage.lines)}\n"
        f"  - Functions {_render_counters(coverage.functions)}\n"
        f"  - Branches  {_render_counters(coverage.branches)}\n"
        "\n"
        "Details:\n"
    )


class TextSummaryRenderer(Renderer):
    """Renders a whole tree as one indented text summary.

    Files are listed before the modules of the same level, each module
    followed by its own content one indentation level deeper.
    """

    def render_module(self, root: CoverageNode, module: CoverageNode) -> str:
        return f"{_render_header(module)}\n{_render_children(module, 1)}"

    def render_file(
        self, root: CoverageNode, file: LeafRecord, lines_provider: FileLinesProvider
    ) -> str:
        """Not supported: the single-page exporter only calls :meth:`render_module`."""
        raise NotImplementedError("The text renderer only displays a coverage summary")

    def required_resources(self, root: CoverageNode) -> list[tuple[str, str]]:
        return []
