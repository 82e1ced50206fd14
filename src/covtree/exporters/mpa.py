"""Multi-page exporter: one page per module and per tested file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from covtree.exporters.links import RESOURCES_DIR, LinksComputer
from covtree.utils.file_lines import LocalFileLinesProvider

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from covtree.aggregation.base import CoverageNode
    from covtree.aggregation.tree import LeafRecord
    from covtree.renderers.base import Renderer
    from covtree.utils.file_lines import FileLinesProvider
    from covtree.utils.filesystem import FileSystem

logger = logging.getLogger(__name__)


def _local_lines(file: LeafRecord) -> FileLinesProvider:
    return LocalFileLinesProvider(file.source_path)


class MpaExporter:
    """Writes a browsable site mirroring the coverage tree.

    Module pages are written depth-first: a module's index, then its child
    modules, then its files. Shared resources are written once at the end.
    """

    def __init__(
        self,
        renderer: Renderer,
        root: CoverageNode,
        output_dir: Path,
        file_system: FileSystem,
        *,
        links: LinksComputer | None = None,
        lines_provider_factory: Callable[[LeafRecord], FileLinesProvider] = _local_lines,
    ) -> None:
        """Initialize the exporter.

        Args:
            renderer: Produces page bodies.
            root: Top of the tree to export.
            output_dir: Directory the root page is written into.
            file_system: Destination of every written page.
            links: Names output pages; defaults to HTML pages.
            lines_provider_factory: Gives the source lines of a tested file.
        """
        self._renderer = renderer
        self._root = root
        self._output_dir = output_dir
        self._file_system = file_system
        self._links = links or LinksComputer()
        self._lines_provider_factory = lines_provider_factory

    def export(self) -> Path:
        """Write every page and resource.

        Returns:
            Path of the root page.
        """
        logger.info("Exporting report %r to %s", self._root.name, self._output_dir)
        self._export_module(self._root)
        self._export_resources()

        index = self._output_dir / self._links.index_name
        logger.info("Report exported to %s", index)
        return index

    def _write_page(self, node: CoverageNode, content: str) -> None:
        target = self._output_dir / self._links.link_to(self._root, node).link
        self._file_system.create_dir_all(target.parent)
        self._file_system.write_all(target, content)
        logger.debug("Wrote %s", target)

    def _export_module(self, module: CoverageNode) -> None:
        self._write_page(module, self._renderer.render_module(self._root, module))
        for child in module.modules:
            self._export_module(child)
        for file in module.files:
            self._export_file(file)

    def _export_file(self, file: LeafRecord) -> None:
        content = self._renderer.render_file(
            self._root, file, self._lines_provider_factory(file)
        )
        self._write_page(file, content)

    def _export_resources(self) -> None:
        resources = self._renderer.required_resources(self._root)
        if not resources:
            return
        resources_dir = self._output_dir / RESOURCES_DIR
        self._file_system.create_dir_all(resources_dir)
        for name, content in resources:
            self._file_system.write_all(resources_dir / name, content)
