"""LCOV tracefile reader.

Parses the ``.info`` format written by lcov/geninfo, ``gcovr --lcov``,
``cargo llvm-cov --lcov`` and friends into :class:`RawRecord` objects. Only
the keys needed to build a report are read: ``SF``, ``FN``, ``FNDA``, ``DA``,
``BRDA`` and ``end_of_record``; summary keys (``LF``, ``LH``, ...) are
recomputed from the detailed entries instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covtree.models.record import RawRecord, sum_taken

if TYPE_CHECKING:
    from pathlib import Path

    from covtree.models.record import BranchId

logger = logging.getLogger(__name__)


# ── Constants ────────────────────────────────────────────────────

_LCOV_SF = "SF"
_LCOV_FN = "FN"
_LCOV_FNDA = "FNDA"
_LCOV_DA = "DA"
_LCOV_BRDA = "BRDA"
_LCOV_END = "end_of_record"
_LCOV_DA_PARTS = 2
_LCOV_BRDA_PARTS = 4
_LCOV_NOT_TAKEN = "-"

_COUNT_AND_NAME_RE = re.compile(r"^(\d+),\s*(.*)$")


@dataclass
class _LcovRecordState:
    path: str | None = None
    fns: list[str] = field(default_factory=list)
    fnda: dict[str, int] = field(default_factory=dict)
    da: dict[int, int] = field(default_factory=dict)
    brda: dict[BranchId, int | None] = field(default_factory=dict)

    def to_record(self) -> RawRecord:
        # Declared functions without an FNDA entry were never called.
        functions = dict.fromkeys(self.fns, 0)
        functions.update(self.fnda)
        return RawRecord(
            path=self.path or "",
            lines=dict(self.da),
            functions=functions,
            branches=dict(self.brda),
        )


# ── Parsing ──────────────────────────────────────────────────────


def _apply_lcov_key(key: str, value: str, state: _LcovRecordState) -> None:
    if key == _LCOV_FN:
        match = _COUNT_AND_NAME_RE.match(value)
        if match:
            name = match.group(2).strip()
            if name not in state.fns:
                state.fns.append(name)
        return
    if key == _LCOV_FNDA:
        match = _COUNT_AND_NAME_RE.match(value)
        if match:
            name = match.group(2).strip()
            state.fnda[name] = state.fnda.get(name, 0) + int(match.group(1))
        return
    if key == _LCOV_DA:
        parts = value.split(",")
        if len(parts) < _LCOV_DA_PARTS:
            logger.debug("Skipping malformed DA entry %r in %s", value, state.path)
            return
        try:
            line_number = int(parts[0].strip())
            hits = int(parts[1].strip())
        except ValueError:
            logger.debug("Skipping malformed DA entry %r in %s", value, state.path)
            return
        state.da[line_number] = state.da.get(line_number, 0) + hits
        return
    if key == _LCOV_BRDA:
        parts = value.split(",")
        if len(parts) < _LCOV_BRDA_PARTS:
            logger.debug("Skipping malformed BRDA entry %r in %s", value, state.path)
            return
        try:
            branch_id = (int(parts[0].strip()), int(parts[1].strip()), int(parts[2].strip()))
            taken_s = parts[3].strip()
            taken = None if taken_s == _LCOV_NOT_TAKEN else int(taken_s)
        except ValueError:
            logger.debug("Skipping malformed BRDA entry %r in %s", value, state.path)
            return
        state.brda[branch_id] = sum_taken(state.brda.get(branch_id), taken)
        return


def parse_lcov_string(content: str) -> list[RawRecord]:
    """Parse LCOV text into one record per ``SF`` section, in file order."""
    records: list[RawRecord] = []
    state = _LcovRecordState()

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line == _LCOV_END:
            if state.path is not None:
                records.append(state.to_record())
            state = _LcovRecordState()
            continue
        if ":" not in line:
            continue
        key, _, value = line.partition(":")
        value = value.strip()
        if key == _LCOV_SF:
            if state.path is not None:
                records.append(state.to_record())
            state = _LcovRecordState(path=value)
        elif state.path is not None:
            _apply_lcov_key(key, value, state)

    if state.path is not None:
        records.append(state.to_record())

    logger.debug("Parsed %d LCOV records", len(records))
    return records


def parse_lcov_file(path: Path) -> list[RawRecord]:
    """Read and parse the LCOV tracefile at *path*."""
    return parse_lcov_string(path.read_text(encoding="utf-8"))
