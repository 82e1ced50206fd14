"""Report generation: build the coverage tree, then export it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from covtree.aggregation.inputs import build_from_inputs, input_from_config
from covtree.aggregation.multi_report import MultiReport
from covtree.aggregation.tree import RootNode
from covtree.errors import ConfigurationError
from covtree.exporters.links import LinksComputer
from covtree.exporters.mpa import MpaExporter
from covtree.exporters.spa import SpaExporter
from covtree.renderers.html import HtmlRenderer
from covtree.renderers.text import TextSummaryRenderer
from covtree.utils.filesystem import LocalFileSystem

if TYPE_CHECKING:
    from covtree.aggregation.base import CoverageNode
    from covtree.config import ReportConfig
    from covtree.utils.filesystem import FileSystem

logger = logging.getLogger(__name__)


def build_single_report(config: ReportConfig, file_system: FileSystem) -> RootNode:
    """Build the tree of a report made of exactly one input, titled with the report name."""
    aggregator_input = input_from_config(config.inputs[0], file_system).with_name(config.name)
    return RootNode.from_input(aggregator_input)


def build_multi_report(config: ReportConfig, file_system: FileSystem) -> MultiReport:
    """Build one root per input under a shared report, each under its own key."""
    report = MultiReport(name=config.name)
    for aggregator_input in build_from_inputs(config.inputs, file_system):
        report.add_report(RootNode.from_input(aggregator_input))
    return report


def build_report_root(config: ReportConfig, file_system: FileSystem) -> CoverageNode:
    """Build the tree for *config*: a single root for one input, a multi-report otherwise.

    Raises:
        ConfigurationError: If *config* has no input.
    """
    if not config.inputs:
        raise ConfigurationError("At least one coverage input is required")
    if len(config.inputs) == 1:
        return build_single_report(config, file_system)
    return build_multi_report(config, file_system)


def run_report(config: ReportConfig, file_system: FileSystem | None = None) -> CoverageNode:
    """Generate the report described by *config* and return its tree.

    Raises:
        ConfigurationError: If the reporter is unknown or an input is invalid.
    """
    file_system = file_system or LocalFileSystem()
    root = build_report_root(config, file_system)
    output = Path(config.output)

    if config.reporter == "html":
        links = LinksComputer()
        MpaExporter(HtmlRenderer(links), root, output, file_system, links=links).export()
    elif config.reporter == "text":
        SpaExporter(TextSummaryRenderer(), root, output, file_system).export()
    else:
        raise ConfigurationError(f"Unknown reporter: {config.reporter}")

    logger.info("Generated %s report %r in %s", config.reporter, root.name, output)
    return root
