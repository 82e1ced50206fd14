"""Base interface for report page renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covtree.aggregation.base import CoverageNode
    from covtree.aggregation.tree import LeafRecord
    from covtree.utils.file_lines import FileLinesProvider


class Renderer(ABC):
    """Turns coverage tree nodes into page bodies.

    Renderers never write anything themselves: exporters decide where each
    page goes and write the returned text through a file system.
    """

    @abstractmethod
    def render_module(self, root: CoverageNode, module: CoverageNode) -> str:
        """Render the page of a directory-like node (module, root or report).

        Args:
            root: Top of the exported report, used to compute navigation.
            module: Node being rendered.

        Returns:
            Page body.
        """

    @abstractmethod
    def render_file(
        self, root: CoverageNode, file: LeafRecord, lines_provider: FileLinesProvider
    ) -> str:
        """Render the detail page of one tested source file.

        Args:
            root: Top of the exported report, used to compute navigation.
            file: Leaf being rendered.
            lines_provider: Gives access to the file's source lines.

        Returns:
            Page body.
        """

    @abstractmethod
    def required_resources(self, root: CoverageNode) -> list[tuple[str, str]]:
        """Return ``(name, content)`` pairs written once under the shared resources directory."""
