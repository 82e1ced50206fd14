"""Source line providers for file detail pages."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class FileLinesProvider(ABC):
    """Gives access to the source lines of one tested file."""

    @abstractmethod
    def get_lines(self) -> list[str]:
        """Return the file content split into lines (line 1 at index 0)."""


class LocalFileLinesProvider(FileLinesProvider):
    """Reads source lines from the local disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def get_lines(self) -> list[str]:
        try:
            return self._path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            logger.warning("Cannot read source file %s: %s", self._path, e)
            return []


class StaticFileLinesProvider(FileLinesProvider):
    """Serves lines held in memory."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)

    def get_lines(self) -> list[str]:
        return list(self._lines)
