"""Renderers producing report page bodies."""

from __future__ import annotations

from covtree.renderers.base import Renderer
from covtree.renderers.html import HtmlRenderer
from covtree.renderers.text import TextSummaryRenderer

__all__ = ["HtmlRenderer", "Renderer", "TextSummaryRenderer"]
