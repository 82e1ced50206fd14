"""Raw per-file coverage records, as produced by a tracefile reader."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

BranchId = tuple[int, int, int]
"""Branch identifier: ``(line, block, branch)``."""


@dataclass
class RawRecord:
    """Hit counts for one source file, before any aggregation."""

    path: str
    """Source file path exactly as found in the coverage input."""

    lines: dict[int, int] = field(default_factory=dict)
    """Execution count per line number."""

    functions: dict[str, int] = field(default_factory=dict)
    """Execution count per function name."""

    branches: dict[BranchId, int | None] = field(default_factory=dict)
    """Taken count per branch; None when the branch was never evaluated."""


def sum_taken(a: int | None, b: int | None) -> int | None:
    """Add two branch taken counts, where None means the branch was never evaluated."""
    if a is None:
        return b
    if b is None:
        return a
    return a + b


def _merge_pair(a: RawRecord, b: RawRecord) -> RawRecord:
    lines = dict(a.lines)
    for line, hits in b.lines.items():
        lines[line] = lines.get(line, 0) + hits

    functions = dict(a.functions)
    for name, hits in b.functions.items():
        functions[name] = functions.get(name, 0) + hits

    branches = dict(a.branches)
    for branch_id, taken in b.branches.items():
        branches[branch_id] = sum_taken(branches.get(branch_id), taken)

    return RawRecord(path=a.path, lines=lines, functions=functions, branches=branches)


def merge_records(records: Iterable[RawRecord]) -> list[RawRecord]:
    """Fold records sharing a source path into one.

    LCOV tracefiles repeat a source file once per test name. Hit counts of
    repeated entries are summed; the result keeps first-seen order.
    """
    merged: dict[str, RawRecord] = {}
    for record in records:
        existing = merged.get(record.path)
        merged[record.path] = record if existing is None else _merge_pair(existing, record)
    return list(merged.values())
