"""Path component utilities used to build and navigate coverage trees.

Paths are handled as sequences of components rather than strings so that
prefix stripping and relative-link arithmetic never depend on separators,
trailing slashes or the platform running the report.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covtree.errors import TreeInvariantError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

_SEPARATORS_RE = re.compile(r"[\\/]+")
_PARENT = ".."
_CURRENT = "."


def split_path(path: str) -> list[str]:
    """Split *path* into its non-empty components.

    Leading, trailing and repeated separators are ignored, as are ``.``
    components, so ``"/a//b/"``, ``"./a/b"`` and ``"a/b"`` all give
    ``["a", "b"]``. ``..`` components are kept.
    """
    return [part for part in _SEPARATORS_RE.split(path) if part and part != _CURRENT]


def has_parent_component(parts: Sequence[str]) -> bool:
    """Return True if *parts* climbs with a ``..`` component."""
    return _PARENT in parts


def longest_common_prefix(paths: Iterable[Sequence[str]]) -> list[str]:
    """Return the components shared by every sequence in *paths*.

    Returns an empty list for an empty input, and stops as soon as two
    sequences share nothing.
    """
    iterator = iter(paths)
    first = next(iterator, None)
    if first is None:
        return []

    prefix = list(first)
    for parts in iterator:
        shared = 0
        for ours, theirs in zip(prefix, parts, strict=False):
            if ours != theirs:
                break
            shared += 1
        if shared == 0:
            return []
        prefix = prefix[:shared]
    return prefix


def common_directory(file_paths: Iterable[str]) -> str:
    """Return the deepest directory containing every file in *file_paths*.

    The file name of each path is dropped before comparing, so a single file
    gives its own directory. The result is ``/``-joined and keeps a leading
    slash when every input is absolute.
    """
    paths = list(file_paths)
    prefix = longest_common_prefix(split_path(path)[:-1] for path in paths)
    if not prefix:
        return ""
    joined = "/".join(prefix)
    if all(path.startswith("/") for path in paths):
        return f"/{joined}"
    return joined


def strip_prefix(parts: Sequence[str], prefix: Sequence[str]) -> list[str] | None:
    """Return *parts* without *prefix*, or None when *parts* does not start with it."""
    if list(parts[: len(prefix)]) != list(prefix):
        return None
    return list(parts[len(prefix) :])


def _check_components(parts: Sequence[str]) -> None:
    for part in parts:
        if part in {_PARENT, _CURRENT}:
            raise TreeInvariantError(
                f"Cannot compute a relative path through {'/'.join(parts)!r}: "
                f"'{part}' is not a tree position"
            )


def relative_path(from_parts: Sequence[str], to_parts: Sequence[str]) -> list[str]:
    """Return the components leading from *from_parts* to *to_parts*.

    Both arguments are directory-like positions from the same root. The
    result climbs with ``..`` only as far as the deepest shared ancestor.

    Raises:
        TreeInvariantError: If either position contains ``.`` or ``..``.
    """
    _check_components(from_parts)
    _check_components(to_parts)

    shared = len(longest_common_prefix([from_parts, to_parts]))
    return [_PARENT] * (len(from_parts) - shared) + list(to_parts[shared:])


def apply_relative(base: Sequence[str], relative: Sequence[str]) -> list[str]:
    """Resolve *relative* against *base*, the inverse of :func:`relative_path`."""
    resolved = list(base)
    for part in relative:
        if part == _PARENT:
            if not resolved:
                raise TreeInvariantError(
                    f"Relative path {'/'.join(relative)!r} escapes above {'/'.join(base)!r}"
                )
            resolved.pop()
        elif part != _CURRENT:
            resolved.append(part)
    return resolved


@dataclass(frozen=True)
class CoveragePath:
    """Position of a node inside a coverage tree."""

    parts: tuple[str, ...] = ()
    """Non-empty path components, from the tree root."""

    is_dir: bool = field(default=False, compare=False)
    """True for modules and roots, False for source files."""

    @classmethod
    def from_string(cls, path: str, *, is_dir: bool = False) -> CoveragePath:
        """Build a path from a separator-delimited string."""
        return cls(tuple(split_path(path)), is_dir=is_dir)

    @property
    def name(self) -> str:
        """Return the last component, or an empty string for the tree root."""
        return self.parts[-1] if self.parts else ""

    @property
    def parent(self) -> CoveragePath:
        """Return the directory containing this position."""
        return CoveragePath(self.parts[:-1], is_dir=True)

    @property
    def page_directory(self) -> tuple[str, ...]:
        """Return the directory a page for this position is written into."""
        return self.parts if self.is_dir else self.parts[:-1]

    def joinpath(self, *components: str, is_dir: bool = False) -> CoveragePath:
        """Return a new path with *components* appended."""
        return CoveragePath((*self.parts, *components), is_dir=is_dir)

    def is_relative_to(self, other: CoveragePath) -> bool:
        """Return True if *other* is this path or one of its ancestors."""
        return self.parts[: len(other.parts)] == other.parts

    def as_posix(self) -> str:
        """Return the components joined with ``/``."""
        return "/".join(self.parts)

    def __str__(self) -> str:
        return self.as_posix()
