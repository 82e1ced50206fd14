"""Read interface shared by every node of a coverage tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covtree.models.coverage import AggregatedCoverage
    from covtree.paths import CoveragePath

DEFAULT_REPORT_NAME = "Test report"


@runtime_checkable
class CoverageNode(Protocol):
    """A file, module, root or multi-report inside a coverage tree.

    Link computation only relies on ``name`` and ``path``; renderers also
    read ``coverage`` and walk ``modules`` and ``files``.
    """

    @property
    def name(self) -> str:
        """Display name of the node."""
        ...

    @property
    def path(self) -> CoveragePath:
        """Position of the node from the top of the report."""
        ...

    @property
    def coverage(self) -> AggregatedCoverage:
        """Counters summed over every file below (or equal to) this node."""
        ...

    @property
    def modules(self) -> Sequence[CoverageNode]:
        """Directory-like children, in insertion order."""
        ...

    @property
    def files(self) -> Sequence[CoverageNode]:
        """Source-file children, in insertion order."""
        ...
