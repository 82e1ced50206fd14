"""Multi-page HTML renderer.

One page per module and per tested file. Pages share a single stylesheet and
the language icons of the listed files, written once under the resources
directory and linked relatively from every page.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from covtree.models.coverage import format_percentage
from covtree.renderers.base import Renderer
from covtree.renderers.file_icons import icon_key, icon_resources

if TYPE_CHECKING:
    from covtree.aggregation.base import CoverageNode
    from covtree.aggregation.tree import LeafRecord
    from covtree.exporters.links import LinksComputer
    from covtree.models.coverage import AggregatedCoverage, CoverageCounters
    from covtree.utils.file_lines import FileLinesProvider

STYLESHEET_NAME = "style.css"

_TURNS_PER_PERCENT = 0.005

_STYLESHEET = """\
* { margin: 0; padding: 0; box-sizing: border-box; }
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
    background: #f6f8fa;
    color: #24292f;
    padding: 2rem;
    line-height: 1.5;
}
main { max-width: 1200px; margin: 0 auto; }
h1 { font-size: 1.75rem; margin-bottom: 1rem; }
h2 { font-size: 1.25rem; margin: 1.5rem 0 0.75rem; }
a { color: #0969da; text-decoration: none; }
a:hover { text-decoration: underline; }
.navigation { display: flex; gap: 0.25rem; color: #57606a; margin-bottom: 0.5rem; }
.gauges { display: flex; gap: 2rem; margin-bottom: 1.5rem; }
.gauge { display: flex; flex-direction: column; align-items: center; }
.gauge-body {
    width: 120px; height: 60px; position: relative; overflow: hidden;
    border-radius: 120px 120px 0 0; background: #d0d7de;
}
.gauge-c {
    position: absolute; top: 100%; left: 0; width: 100%; height: 100%;
    transform-origin: center top;
}
.gauge-data { position: absolute; bottom: 0; width: 100%; text-align: center; }
.percent { font-weight: 600; }
.bg-none { background: #d0d7de; }
.bg-0, .bg-1, .bg-2, .bg-3, .bg-4 { background: #cf222e; }
.bg-5, .bg-6, .bg-7 { background: #bf8700; }
.bg-8, .bg-9, .bg-10 { background: #1a7f37; }
table { width: 100%; border-collapse: collapse; background: #fff; }
th, td { padding: 0.25rem 0.75rem; border-bottom: 1px solid #d8dee4; text-align: left; }
td.number { text-align: right; font-variant-numeric: tabular-nums; }
pre { margin: 0; font-family: ui-monospace, SFMono-Regular, Menlo, monospace; }
tr.line-covered { background: #dafbe1; }
tr.line-not-covered { background: #ffebe9; }
.function-covered { color: #1a7f37; }
.function-uncovered { color: #cf222e; }
img.file-icon { width: 1em; height: 1em; vertical-align: middle; margin-right: 0.35rem; }
"""


def _percentage_class(percentage: float | None) -> str:
    if percentage is None:
        return "bg-none"
    return f"bg-{int(percentage / 10 + 0.5)}"


def _render_gauge(counters: CoverageCounters, label: str) -> str:
    percentage = counters.percentage()
    turns = (percentage or 0.0) * _TURNS_PER_PERCENT
    return (
        '<div class="gauge">'
        '<div class="gauge-body">'
        f'<div class="gauge-c {_percentage_class(percentage)}" '
        f'style="transform: rotate({turns:.2f}turn)"></div>'
        f'<div class="gauge-data"><span class="percent">{format_percentage(percentage)}</span>'
        "</div></div>"
        f"<div>{label} {counters.covered_count}/{counters.count}</div>"
        "</div>"
    )


def _render_gauges(coverage: AggregatedCoverage) -> str:
    return (
        '<div class="gauges">'
        f"{_render_gauge(coverage.lines, 'Lines')}"
        f"{_render_gauge(coverage.functions, 'Functions')}"
        f"{_render_gauge(coverage.branches, 'Branches')}"
        "</div>"
    )


def _render_cell(counters: CoverageCounters) -> str:
    return (
        f'<td class="number">{format_percentage(counters.percentage())}</td>'
        f'<td class="number">{counters.covered_count}/{counters.count}</td>'
    )


def _line_class(hits: int | None) -> str:
    if hits is None:
        return "line-not-tested"
    return "line-covered" if hits > 0 else "line-not-covered"


class HtmlRenderer(Renderer):
    """Renders browsable HTML pages linked with relative URLs."""

    def __init__(self, links: LinksComputer) -> None:
        """Initialize the renderer.

        Args:
            links: Computes breadcrumbs, child links and resource links.
        """
        self._links = links

    # ── Page layout ──────────────────────────────────────────────────

    def _render_page(self, root: CoverageNode, node: CoverageNode, body: str) -> str:
        stylesheet = self._links.link_to_shared_resource(root, node, STYLESHEET_NAME)
        title = html.escape(node.name)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - Coverage report</title>
    <link rel="stylesheet" href="{stylesheet}">
</head>
<body>
    <main>
        {self._render_navigation(root, node)}
        <h1>{title}</h1>
        {_render_gauges(node.coverage)}
        {body}
    </main>
</body>
</html>
"""

    def _render_navigation(self, root: CoverageNode, node: CoverageNode) -> str:
        crumbs = self._links.breadcrumbs(root, node)
        if not crumbs:
            return ""
        parts = [
            f'<a href="{html.escape(crumb.link)}">{html.escape(crumb.label)}</a> /'
            for crumb in crumbs
        ]
        parts.append(f"<span>{html.escape(node.name)}</span>")
        return f'<nav class="navigation">{" ".join(parts)}</nav>'

    # ── Module pages ─────────────────────────────────────────────────

    def _render_icon(self, root: CoverageNode, module: CoverageNode, child: CoverageNode) -> str:
        if child.path.is_dir:
            return ""
        key = icon_key(child.name)
        if key is None:
            return ""
        src = self._links.link_to_shared_resource(root, module, key)
        return f'<img class="file-icon" src="{html.escape(src)}" alt="">'

    def _render_children(self, root: CoverageNode, module: CoverageNode) -> str:
        children = [
            *sorted(module.modules, key=lambda child: child.name),
            *sorted(module.files, key=lambda child: child.name),
        ]
        if not children:
            return '<p class="empty-state">No tested files</p>'

        rows = []
        for child in children:
            link = self._links.link_to(module, child)
            coverage = child.coverage
            rows.append(
                "<tr>"
                f"<td>{self._render_icon(root, module, child)}"
                f'<a href="{html.escape(link.link)}">{html.escape(link.label)}</a></td>'
                f"{_render_cell(coverage.lines)}"
                f"{_render_cell(coverage.functions)}"
                f"{_render_cell(coverage.branches)}"
                "</tr>"
            )
        return (
            '<table class="children">'
            "<thead><tr><th>Name</th>"
            '<th colspan="2">Lines</th>'
            '<th colspan="2">Functions</th>'
            '<th colspan="2">Branches</th></tr></thead>'
            f"<tbody>{''.join(rows)}</tbody>"
            "</table>"
        )

    def render_module(self, root: CoverageNode, module: CoverageNode) -> str:
        return self._render_page(root, module, self._render_children(root, module))

    # ── File pages ───────────────────────────────────────────────────

    def _render_functions(self, file: LeafRecord) -> str:
        if not file.function_hits:
            return ""
        rows = []
        for name, hits in sorted(file.function_hits.items()):
            css_class = "function-covered" if hits > 0 else "function-uncovered"
            rows.append(
                f'<tr class="{css_class}"><td>{html.escape(name)}</td>'
                f'<td class="number">{hits} calls</td></tr>'
            )
        return f'<h2 id="functions">Functions</h2><table>{"".join(rows)}</table>'

    def _render_lines(self, file: LeafRecord, lines: list[str]) -> str:
        line_count = max(len(lines), max(file.line_hits, default=0))
        rows = []
        for number in range(1, line_count + 1):
            hits = file.line_hits.get(number)
            text = lines[number - 1] if number <= len(lines) else ""
            rows.append(
                f'<tr class="{_line_class(hits)}">'
                f'<td class="number">{number}</td>'
                f'<td class="number">{"" if hits is None else hits}</td>'
                f"<td><pre>{html.escape(text)}</pre></td></tr>"
            )
        return f'<h2 id="lines">Lines</h2><table class="lines">{"".join(rows)}</table>'

    def render_file(
        self, root: CoverageNode, file: LeafRecord, lines_provider: FileLinesProvider
    ) -> str:
        body = self._render_functions(file) + self._render_lines(file, lines_provider.get_lines())
        return self._render_page(root, file, body)

    def required_resources(self, root: CoverageNode) -> list[tuple[str, str]]:
        return [(STYLESHEET_NAME, _STYLESHEET), *icon_resources(root)]
