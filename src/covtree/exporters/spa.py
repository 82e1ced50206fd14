"""Single-page exporter writing one summary of the whole tree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from covtree.aggregation.base import CoverageNode
    from covtree.renderers.base import Renderer
    from covtree.utils.filesystem import FileSystem

logger = logging.getLogger(__name__)

SUMMARY_FILE_NAME = "coverage.txt"


class SpaExporter:
    """Writes the root page of the tree to ``coverage.txt``."""

    def __init__(
        self,
        renderer: Renderer,
        root: CoverageNode,
        output_dir: Path,
        file_system: FileSystem,
    ) -> None:
        self._renderer = renderer
        self._root = root
        self._output_dir = output_dir
        self._file_system = file_system

    def export(self) -> Path:
        """Write the summary and return its path."""
        logger.info("Exporting summary of %r to %s", self._root.name, self._output_dir)
        self._file_system.create_dir_all(self._output_dir)

        target = self._output_dir / SUMMARY_FILE_NAME
        self._file_system.write_all(target, self._renderer.render_module(self._root, self._root))
        logger.info("Summary exported to %s", target)
        return target
