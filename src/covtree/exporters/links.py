"""Relative hyperlinks between pages of a statically exported report.

Every page lives in the directory of its node: a module's page is
``<module>/index.<ext>`` and a file's page is ``<file name>.<ext>`` next to
it. All links are relative to the page they appear on, so the exported
report can be moved or served from any sub-path.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, NamedTuple

from covtree.errors import TreeInvariantError
from covtree.paths import relative_path

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covtree.aggregation.base import CoverageNode

RESOURCES_DIR = "_resources"
_INDEX_STEM = "index"
_ESCAPED_INDEX_RE = re.compile(rf"{_INDEX_STEM}_*")


class Link(NamedTuple):
    """A relative hyperlink and the text it is shown with."""

    link: str
    label: str


def _join(parts: Sequence[str]) -> str:
    return "/".join(parts)


def _check_inside(root: CoverageNode, target: CoverageNode) -> None:
    if not target.path.is_relative_to(root.path):
        raise TreeInvariantError(
            f"{target.path.as_posix()!r} is not inside {root.path.as_posix()!r}"
        )


class LinksComputer:
    """Computes navigation links for any node of a coverage tree."""

    def __init__(self, extension: str = "html") -> None:
        self._extension = extension

    @property
    def extension(self) -> str:
        return self._extension

    @property
    def index_name(self) -> str:
        """Return the page name of directory-like nodes."""
        return f"{_INDEX_STEM}.{self._extension}"

    def file_page_name(self, file_name: str) -> str:
        """Return the page name of a source file, keeping its own extension.

        Files named ``index``, ``index_``, ... get one more trailing
        underscore, so no file page shares the name of its module's index.
        """
        if _ESCAPED_INDEX_RE.fullmatch(file_name):
            file_name = f"{file_name}_"
        return f"{file_name}.{self._extension}"

    def breadcrumbs(self, root: CoverageNode, target: CoverageNode) -> list[Link]:
        """Return the links from *root* down to the parent of *target*.

        Links are relative to the page of *target*. The root itself gets an
        empty list.

        Raises:
            TreeInvariantError: If *target* is not inside *root*.
        """
        _check_inside(root, target)
        root_parts = root.path.parts
        target_parts = target.path.parts
        if target_parts == root_parts:
            return []

        page_dir = target.path.page_directory
        crumbs: list[Link] = []
        for depth in range(len(target_parts) - 1, len(root_parts), -1):
            ancestor = target_parts[:depth]
            link = relative_path(page_dir, ancestor) + [self.index_name]
            crumbs.append(Link(_join(link), ancestor[-1]))

        root_link = relative_path(page_dir, root_parts) + [self.index_name]
        crumbs.append(Link(_join(root_link), root.name))
        crumbs.reverse()
        return crumbs

    def link_to(self, root: CoverageNode, target: CoverageNode) -> Link:
        """Return the link to the page of *target*, relative to the page of *root*.

        Raises:
            TreeInvariantError: If *target* is not inside *root*.
        """
        _check_inside(root, target)
        base = root.path.page_directory
        if target.path.is_dir:
            parts = relative_path(base, target.path.parts) + [self.index_name]
        else:
            parts = relative_path(base, target.path.parts[:-1]) + [
                self.file_page_name(target.path.name)
            ]
        return Link(_join(parts), target.name)

    def link_to_shared_resource(
        self, root: CoverageNode, current: CoverageNode, resource_name: str
    ) -> str:
        """Return the link from the page of *current* to a resource shared by *root*.

        Raises:
            TreeInvariantError: If *current* is not inside *root*.
        """
        _check_inside(root, current)
        resources = (*root.path.parts, RESOURCES_DIR)
        return _join([*relative_path(current.path.page_directory, resources), resource_name])
