"""Coverage counter models.

``AggregatedCoverage.from_raw_record`` is the only place interpreting raw hit
counts; every layer above it only adds counter pairs together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covtree.models.record import RawRecord


def format_percentage(value: float | None) -> str:
    """Render a percentage with two decimals, or ``-`` when undefined."""
    if value is None:
        return "-"
    return f"{value:.2f}%"


@dataclass(frozen=True)
class CoverageCounters:
    """Number of measured items and how many of them were covered."""

    count: int = 0
    """Number of instrumented items (lines, functions or branches)."""

    covered_count: int = 0
    """Number of those items that were hit at least once."""

    def __post_init__(self) -> None:
        if self.count < 0 or self.covered_count < 0:
            raise ValueError(
                f"Coverage counters must be non-negative "
                f"(got {self.covered_count}/{self.count})"
            )
        if self.covered_count > self.count:
            raise ValueError(
                f"Covered count cannot exceed count (got {self.covered_count}/{self.count})"
            )

    def __add__(self, other: CoverageCounters) -> CoverageCounters:
        return CoverageCounters(
            count=self.count + other.count,
            covered_count=self.covered_count + other.covered_count,
        )

    def percentage(self) -> float | None:
        """Return coverage as a percentage (0.0-100.0), None when nothing was measured."""
        if self.count == 0:
            return None
        return self.covered_count / self.count * 100.0


@dataclass(frozen=True)
class AggregatedCoverage:
    """Line, function and branch counters for a file or a whole subtree."""

    lines: CoverageCounters = field(default_factory=CoverageCounters)
    functions: CoverageCounters = field(default_factory=CoverageCounters)
    branches: CoverageCounters = field(default_factory=CoverageCounters)

    def __add__(self, other: AggregatedCoverage) -> AggregatedCoverage:
        return AggregatedCoverage(
            lines=self.lines + other.lines,
            functions=self.functions + other.functions,
            branches=self.branches + other.branches,
        )

    @classmethod
    def from_raw_record(cls, record: RawRecord) -> AggregatedCoverage:
        """Count covered items of one raw record.

        Lines and functions are covered when hit at least once; a branch is
        covered when its taken count is known and positive.
        """
        return cls(
            lines=CoverageCounters(
                count=len(record.lines),
                covered_count=sum(1 for hits in record.lines.values() if hits > 0),
            ),
            functions=CoverageCounters(
                count=len(record.functions),
                covered_count=sum(1 for hits in record.functions.values() if hits > 0),
            ),
            branches=CoverageCounters(
                count=len(record.branches),
                covered_count=sum(
                    1 for taken in record.branches.values() if taken is not None and taken > 0
                ),
            ),
        )
