"""Tests for the HTML and text renderers (renderers/)."""

from __future__ import annotations

import pytest

from covtree.aggregation import MultiReport, RootNode
from covtree.exporters.links import LinksComputer
from covtree.models import RawRecord
from covtree.renderers import HtmlRenderer, TextSummaryRenderer
from covtree.renderers.html import STYLESHEET_NAME
from covtree.utils.file_lines import StaticFileLinesProvider


def _simple_full_report() -> RootNode:
    """main.cpp (3/4 lines, 2/2 functions, 1/2 branches) and module/nested.cpp (2/2, 1/1)."""
    return RootNode.build(
        [
            RawRecord(
                path="main.cpp",
                lines={1: 1, 2: 1, 3: 1, 4: 0},
                functions={"main": 1, "helper": 2},
                branches={(2, 0, 0): 1, (2, 0, 1): None},
            ),
            RawRecord(path="module/nested.cpp", lines={1: 1, 2: 3}, functions={"nested": 1}),
        ]
    )


# ── TextSummaryRenderer ──────────────────────────────────────────

_EXPECTED_SUMMARY = (
    "Test report:\n"
    "  - Lines            5/6   83.33%\n"
    "  - Functions        3/3  100.00%\n"
    "  - Branches         1/2   50.00%\n"
    "\n"
    "Details:\n"
    "\n"
    "  main.cpp                                         Lines        3/4   75.00%    Functions        2/2  100.00%    Branches        1/2   50.00%\n"
    "  module                                           Lines        2/2  100.00%    Functions        1/1  100.00%    Branches        0/0        -\n"
    "    nested.cpp                                     Lines        2/2  100.00%    Functions        1/1  100.00%    Branches        0/0        -\n"
)


class TestTextSummaryRenderer:
    def test_simple_report(self) -> None:
        report = _simple_full_report()

        rendered = TextSummaryRenderer().render_module(report, report)

        assert rendered == _EXPECTED_SUMMARY

    def test_empty_report(self) -> None:
        report = RootNode()

        rendered = TextSummaryRenderer().render_module(report, report)

        assert rendered.startswith("Test report:\n")
        assert "0/0        -" in rendered
        assert rendered.endswith("Details:\n\n")

    def test_no_resources(self) -> None:
        assert TextSummaryRenderer().required_resources(RootNode()) == []

    def test_file_pages_unsupported(self) -> None:
        report = _simple_full_report()

        with pytest.raises(NotImplementedError):
            TextSummaryRenderer().render_file(
                report, report.files[0], StaticFileLinesProvider([])
            )

    def test_multi_report_lists_roots(self) -> None:
        report = MultiReport(name="All")
        records = [RawRecord(path="/a/core/x.c")]
        report.add_report(RootNode.build(records, prefix="/a/core", key="core"))

        rendered = TextSummaryRenderer().render_module(report, report)

        assert rendered.startswith("All:\n")
        assert "\n  core " in rendered
        assert "\n    x.c " in rendered


# ── HtmlRenderer ─────────────────────────────────────────────────


@pytest.fixture
def renderer() -> HtmlRenderer:
    return HtmlRenderer(LinksComputer())


class TestHtmlRendererModules:
    def test_root_page(self, renderer: HtmlRenderer) -> None:
        report = _simple_full_report()

        page = renderer.render_module(report, report)

        assert "<title>Test report - Coverage report</title>" in page
        assert 'href="_resources/style.css"' in page
        assert '<nav class="navigation">' not in page
        assert 'href="module/index.html"' in page
        assert 'href="main.cpp.html"' in page
        assert "Lines 5/6" in page
        assert "83.33%" in page

    def test_modules_listed_before_files_and_sorted(self, renderer: HtmlRenderer) -> None:
        root = RootNode.build([RawRecord(path=p) for p in ("z.c", "b/x.c", "a.c", "a/y.c")])

        page = renderer.render_module(root, root)

        positions = [page.index(f'href="{link}"') for link in ("a/index.html", "b/index.html")]
        positions += [page.index(f'href="{link}"') for link in ("a.c.html", "z.c.html")]
        assert positions == sorted(positions)

    def test_nested_module_page(self, renderer: HtmlRenderer) -> None:
        report = _simple_full_report()
        module = report.modules[0]

        page = renderer.render_module(report, module)

        assert 'href="../_resources/style.css"' in page
        assert '<a href="../index.html">Test report</a>' in page
        assert 'href="nested.cpp.html"' in page

    def test_empty_module(self, renderer: HtmlRenderer) -> None:
        page = renderer.render_module(RootNode(), RootNode())
        assert "No tested files" in page

    def test_names_are_escaped(self, renderer: HtmlRenderer) -> None:
        root = RootNode.build([RawRecord(path="<b>.c")], name="A & B")

        page = renderer.render_module(root, root)

        assert "A &amp; B" in page
        assert "&lt;b&gt;.c" in page
        assert "<b>.c" not in page

    def test_stylesheet_resource(self, renderer: HtmlRenderer) -> None:
        resources = renderer.required_resources(RootNode())

        assert [name for name, _ in resources] == [STYLESHEET_NAME]
        assert ".line-covered" in resources[0][1]

    def test_icon_resources_follow_file_languages(self, renderer: HtmlRenderer) -> None:
        root = RootNode.build(
            [RawRecord(path=p) for p in ("src/main.rs", "src/lib.rs", "app/main.dart", "x.c")]
        )

        resources = renderer.required_resources(root)

        assert [name for name, _ in resources] == [STYLESHEET_NAME, "dart.svg", "rust.svg"]
        assert all(content.startswith("<svg") for _, content in resources[1:])

    def test_icons_linked_from_module_pages(self, renderer: HtmlRenderer) -> None:
        report = MultiReport(name="All")
        report.add_report(
            RootNode.build(
                [RawRecord(path="/w/core/lib.rs"), RawRecord(path="/w/core/util.c")],
                prefix="/w/core",
                key="core",
            )
        )
        core = report.roots[0]

        page = renderer.render_module(report, core)

        assert '<img class="file-icon" src="../_resources/rust.svg" alt="">' in page
        assert page.count('class="file-icon"') == 1


class TestHtmlRendererFiles:
    def test_file_page(self, renderer: HtmlRenderer) -> None:
        report = _simple_full_report()
        nested = report.modules[0].files[0]
        lines = StaticFileLinesProvider(["int nested() {", "  return 1 < 2;", "}"])

        page = renderer.render_file(report, nested, lines)

        assert 'href="../_resources/style.css"' in page
        assert '<a href="../index.html">Test report</a> /' in page
        assert '<a href="index.html">module</a> /' in page
        assert "<span>nested.cpp</span>" in page
        assert "return 1 &lt; 2;" in page
        assert 'class="line-covered"' in page
        assert 'class="line-not-tested"' in page

    def test_functions_listed(self, renderer: HtmlRenderer) -> None:
        report = _simple_full_report()
        main = report.files[0]

        page = renderer.render_file(report, main, StaticFileLinesProvider([]))

        assert page.index(">helper<") < page.index(">main<")
        assert "2 calls" in page

    def test_uncovered_line(self, renderer: HtmlRenderer) -> None:
        report = _simple_full_report()
        main = report.files[0]

        page = renderer.render_file(report, main, StaticFileLinesProvider(["a", "b", "c", "d"]))

        assert '<tr class="line-not-covered"><td class="number">4</td>' in page

    def test_missing_source_still_lists_hit_lines(self, renderer: HtmlRenderer) -> None:
        report = _simple_full_report()
        main = report.files[0]

        page = renderer.render_file(report, main, StaticFileLinesProvider([]))

        assert page.count("<tr class=\"line-") == 4
