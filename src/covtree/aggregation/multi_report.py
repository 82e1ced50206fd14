"""Container merging several independently built roots into one report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covtree.aggregation.base import DEFAULT_REPORT_NAME
from covtree.errors import DuplicateKeyError
from covtree.models.coverage import AggregatedCoverage
from covtree.paths import CoveragePath

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from covtree.aggregation.tree import LeafRecord, RootNode

logger = logging.getLogger(__name__)


@dataclass
class MultiReport:
    """Report whose children are whole roots, one per coverage input."""

    name: str = DEFAULT_REPORT_NAME
    roots: list[RootNode] = field(default_factory=list)
    coverage: AggregatedCoverage = field(default_factory=AggregatedCoverage)
    path: CoveragePath = field(default_factory=lambda: CoveragePath((), is_dir=True))

    @property
    def modules(self) -> Sequence[RootNode]:
        return self.roots

    @property
    def files(self) -> Sequence[LeafRecord]:
        return ()

    def add_report(self, root: RootNode) -> None:
        """Append *root* and add its counters to the report total.

        Raises:
            DuplicateKeyError: If a root with the same key was already added.
        """
        if any(existing.key == root.key for existing in self.roots):
            raise DuplicateKeyError(root.key)
        self.coverage = self.coverage + root.coverage
        self.roots.append(root)
        logger.debug("Added root %r under key %r", root.name, root.key)

    def iter_files(self) -> Iterator[LeafRecord]:
        """Yield every file of every root, in root order."""
        for root in self.roots:
            yield from root.iter_files()
