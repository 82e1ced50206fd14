"""Exporters writing rendered reports to disk."""

from __future__ import annotations

from covtree.exporters.links import Link, LinksComputer
from covtree.exporters.mpa import MpaExporter
from covtree.exporters.spa import SpaExporter

__all__ = ["Link", "LinksComputer", "MpaExporter", "SpaExporter"]
