"""File-system access used by exporters and input loading."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Minimal file-system operations needed to read inputs and write reports."""

    @abstractmethod
    def create_dir_all(self, path: Path) -> None:
        """Create *path* and any missing parents."""

    @abstractmethod
    def write_all(self, path: Path, content: str) -> None:
        """Write *content* to *path*, replacing any existing file."""

    @abstractmethod
    def read_to_string(self, path: str | Path) -> str:
        """Return the text content of *path*."""


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk."""

    def create_dir_all(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_all(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def read_to_string(self, path: str | Path) -> str:
        return Path(path).read_text(encoding="utf-8")
