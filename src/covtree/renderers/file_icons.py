"""Per-language icons shown next to file names in module listings.

Icons are shared resources: each one needed by a report is written once
under the resources directory and linked relatively from module pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from covtree.aggregation.base import CoverageNode

_RUST_ICON = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 16 16" width="16" height="16">
<circle cx="8" cy="8" r="7" fill="none" stroke="#a72145" stroke-width="1.5"/>
<text x="8" y="11" font-family="sans-serif" font-size="7" font-weight="bold"
 text-anchor="middle" fill="#a72145">R</text>
</svg>
"""

_DART_ICON = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 16 16" width="16" height="16">
<path d="M3 5 L8 1 L14 7 L14 14 L7 14 L1 8 Z" fill="#0175c2"/>
<path d="M8 1 L14 7 L8 7 Z" fill="#02569b"/>
</svg>
"""

_ICONS_BY_EXTENSION: dict[str, tuple[str, str]] = {
    "rs": ("rust.svg", _RUST_ICON),
    "dart": ("dart.svg", _DART_ICON),
}


def _extension(file_name: str) -> str:
    stem, dot, extension = file_name.rpartition(".")
    return extension if dot and stem else ""


def icon_key(file_name: str) -> str | None:
    """Return the resource name of the icon for *file_name*, or None."""
    icon = _ICONS_BY_EXTENSION.get(_extension(file_name))
    return icon[0] if icon else None


def icon_resource(file_name: str) -> tuple[str, str] | None:
    """Return the ``(resource name, SVG content)`` of the icon for *file_name*."""
    return _ICONS_BY_EXTENSION.get(_extension(file_name))


def _iter_file_names(node: CoverageNode) -> Iterator[str]:
    for file in node.files:
        yield file.name
    for module in node.modules:
        yield from _iter_file_names(module)


def icon_resources(root: CoverageNode) -> list[tuple[str, str]]:
    """Return the icons needed by the files of *root*, each once, sorted by name."""
    resources: dict[str, str] = {}
    for name in _iter_file_names(root):
        resource = icon_resource(name)
        if resource is not None:
            resources[resource[0]] = resource[1]
    return sorted(resources.items())
