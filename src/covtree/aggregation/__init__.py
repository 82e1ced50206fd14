"""Aggregation of flat coverage records into report trees."""

from covtree.aggregation.base import DEFAULT_REPORT_NAME, CoverageNode
from covtree.aggregation.inputs import AggregatorInput, build_from_inputs, resolve_keys
from covtree.aggregation.multi_report import MultiReport
from covtree.aggregation.tree import LeafRecord, ModuleNode, RootNode

__all__ = [
    "DEFAULT_REPORT_NAME",
    "AggregatorInput",
    "CoverageNode",
    "LeafRecord",
    "ModuleNode",
    "MultiReport",
    "RootNode",
    "build_from_inputs",
    "resolve_keys",
]
