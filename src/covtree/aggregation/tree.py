"""Aggregation tree built from flat, path-keyed coverage records.

Each record path is stripped of the root prefix and split into
``[module, ..., module, file]``. Missing modules are created on the way
down, and the record's counters are added to every node it passes through,
so each node always holds the sum of everything below it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from covtree.aggregation.base import DEFAULT_REPORT_NAME
from covtree.errors import (
    DuplicateRecordError,
    EmptyPathError,
    ParentDirectoryError,
    PrefixMismatchError,
)
from covtree.models.coverage import AggregatedCoverage
from covtree.models.record import merge_records
from covtree.paths import CoveragePath, has_parent_component, split_path, strip_prefix

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from covtree.aggregation.inputs import AggregatorInput
    from covtree.models.record import BranchId, RawRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafRecord:
    """A tested source file: one raw record plus its counters."""

    name: str
    """File name (last path component)."""

    path: CoveragePath
    """Position of the file in the report tree."""

    relative_path: str
    """Path relative to the owning root's prefix."""

    source_path: str
    """Path of the source file as found in the coverage input."""

    coverage: AggregatedCoverage
    """Counters computed from the raw record."""

    line_hits: Mapping[int, int] = field(default_factory=lambda: MappingProxyType({}))
    function_hits: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    branch_hits: Mapping[BranchId, int | None] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_raw_record(
        cls, record: RawRecord, *, path: CoveragePath, relative_path: str
    ) -> LeafRecord:
        """Freeze *record* into a leaf placed at *path*."""
        return cls(
            name=path.name,
            path=path,
            relative_path=relative_path,
            source_path=record.path,
            coverage=AggregatedCoverage.from_raw_record(record),
            line_hits=MappingProxyType(dict(record.lines)),
            function_hits=MappingProxyType(dict(record.functions)),
            branch_hits=MappingProxyType(dict(record.branches)),
        )

    @property
    def modules(self) -> Sequence[ModuleNode]:
        return ()

    @property
    def files(self) -> Sequence[LeafRecord]:
        return ()


@dataclass
class ModuleNode:
    """A directory inside a coverage tree."""

    name: str
    path: CoveragePath
    modules: list[ModuleNode] = field(default_factory=list)
    files: list[LeafRecord] = field(default_factory=list)
    coverage: AggregatedCoverage = field(default_factory=AggregatedCoverage)

    def find_module(self, name: str) -> ModuleNode | None:
        """Return the direct child module called *name*, if any."""
        return _find_module(self, name)

    def iter_files(self) -> Iterator[LeafRecord]:
        """Yield every file below this module, depth-first."""
        return _iter_files(self)


def _find_module(node: ModuleNode | RootNode, name: str) -> ModuleNode | None:
    return next((module for module in node.modules if module.name == name), None)


def _iter_files(node: ModuleNode | RootNode) -> Iterator[LeafRecord]:
    yield from node.files
    for module in node.modules:
        yield from _iter_files(module)


def _contains_leaf(node: ModuleNode | RootNode, tail: Sequence[str]) -> bool:
    current: ModuleNode | RootNode | None = node
    for component in tail[:-1]:
        current = _find_module(current, component)
        if current is None:
            return False
    return any(leaf.name == tail[-1] for leaf in current.files)


def _insert_into(node: ModuleNode | RootNode, tail: Sequence[str], leaf: LeafRecord) -> None:
    node.coverage = node.coverage + leaf.coverage
    if len(tail) == 1:
        node.files.append(leaf)
        return

    child = _find_module(node, tail[0])
    if child is None:
        child = ModuleNode(name=tail[0], path=node.path.joinpath(tail[0], is_dir=True))
        node.modules.append(child)
        logger.debug("Created module %s", child.path)
    _insert_into(child, tail[1:], leaf)


@dataclass
class RootNode:
    """Top of the tree built from one coverage input."""

    prefix: str = ""
    """Directory stripped from every record path."""

    key: str = ""
    """Deduplicated key naming this root's subtree inside a multi-report."""

    name: str = ""
    """Display name; defaults to the last prefix component."""

    modules: list[ModuleNode] = field(default_factory=list)
    files: list[LeafRecord] = field(default_factory=list)
    coverage: AggregatedCoverage = field(default_factory=AggregatedCoverage)
    path: CoveragePath = field(init=False)

    def __post_init__(self) -> None:
        self._prefix_parts = split_path(self.prefix)
        if not self.name:
            self.name = self._prefix_parts[-1] if self._prefix_parts else DEFAULT_REPORT_NAME
        self.path = CoveragePath(tuple(split_path(self.key)), is_dir=True)

    @classmethod
    def build(
        cls,
        records: Iterable[RawRecord],
        *,
        prefix: str = "",
        key: str = "",
        name: str | None = None,
    ) -> RootNode:
        """Build a complete tree from *records* in a single pass."""
        root = cls(prefix=prefix, key=key, name=name or "")
        for record in merge_records(records):
            root.insert(record)
        logger.debug(
            "Built root %r (prefix=%r, key=%r) with %d top-level modules and %d files",
            root.name,
            root.prefix,
            root.key,
            len(root.modules),
            len(root.files),
        )
        return root

    @classmethod
    def from_input(cls, aggregator_input: AggregatorInput) -> RootNode:
        """Build the tree for one resolved coverage input."""
        return cls.build(
            aggregator_input.records,
            prefix=aggregator_input.prefix,
            key=aggregator_input.key,
            name=aggregator_input.name,
        )

    def insert(self, record: RawRecord) -> LeafRecord | None:
        """Insert one record and update every ancestor's counters.

        Returns:
            The new leaf, or None when the record path is the prefix itself.

        Raises:
            EmptyPathError: If the record path has no component.
            PrefixMismatchError: If the record path is outside the root prefix.
            ParentDirectoryError: If the path climbs with ``..`` below the prefix.
            DuplicateRecordError: If a file already exists at that position.
        """
        parts = split_path(record.path)
        if not parts:
            raise EmptyPathError(record.path)

        remaining = strip_prefix(parts, self._prefix_parts)
        if remaining is None:
            raise PrefixMismatchError(record.path, self.prefix)
        if not remaining:
            logger.warning(
                "Dropping coverage record %s: its path is the root prefix %r",
                record.path,
                self.prefix,
            )
            return None
        if has_parent_component(remaining):
            raise ParentDirectoryError(record.path)

        if _contains_leaf(self, remaining):
            raise DuplicateRecordError(record.path)

        leaf = LeafRecord.from_raw_record(
            record,
            path=self.path.joinpath(*remaining),
            relative_path="/".join(remaining),
        )
        _insert_into(self, remaining, leaf)
        return leaf

    def find_module(self, name: str) -> ModuleNode | None:
        """Return the top-level module called *name*, if any."""
        return _find_module(self, name)

    def iter_files(self) -> Iterator[LeafRecord]:
        """Yield every file of this root, depth-first."""
        return _iter_files(self)
