"""Data models for covtree."""

from covtree.models.coverage import AggregatedCoverage, CoverageCounters, format_percentage
from covtree.models.record import BranchId, RawRecord, merge_records

__all__ = [
    "AggregatedCoverage",
    "BranchId",
    "CoverageCounters",
    "RawRecord",
    "format_percentage",
    "merge_records",
]
