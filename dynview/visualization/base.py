"""
Base classes and shared utilities for graph rendering.

This module contains the colour theme and the helpers shared by every
rendering backend. Backends never size anything themselves: every coordinate
comes from the GraphLayout produced by the layout engine.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..layout import GraphLayout, LayoutEngine
from ..models import Graph, Node


class RenderConfig:
    """Shared styling constants for all rendering backends."""

    # Canvas
    BACKGROUND_COLOR = '#1E1E1E'

    # Node body
    NODE_FILL = '#323232'
    NODE_STROKE = '#646464'
    NODE_CORNER_RADIUS = 4
    HEADER_FILL = '#464646'
    TITLE_COLOR = '#F5F5F5'
    TITLE_FONT_SIZE = 12

    # Content band
    CONTENT_COLOR = '#90EE90'
    CONTENT_FONT_SIZE = 11
    CONTENT_FONT_FAMILY = 'monospace'
    CONTENT_MAX_LINES = 2

    # Ports
    PORT_FILL = '#D3D3D3'
    PORT_STROKE = '#808080'
    PORT_LABEL_COLOR = '#D3D3D3'
    PORT_FONT_SIZE = 10

    # Connectors
    CONNECTOR_COLOR = '#B4B4B4'
    CONNECTOR_WIDTH = 2
    CONNECTOR_ALPHA = 0.8
    OUT_OF_RANGE_CONNECTOR_COLOR = '#E74C3C'

    # Text insets inside a node
    TEXT_INSET = 8

    SUPPORTED_FORMATS = {'.png', '.svg', '.pdf'}


class BaseRenderer(ABC):
    """Abstract base class for graph renderers."""

    def __init__(self, layout_engine: Optional[LayoutEngine] = None):
        """Initialize base renderer with shared configuration."""
        self.config = RenderConfig()
        self.layout_engine = layout_engine or LayoutEngine()

    # ========== Shared Utility Methods ==========

    def ensure_layout(self, graph: Graph, layout: Optional[GraphLayout] = None) -> GraphLayout:
        """Use the caller's layout when given so drawing matches what was measured."""
        return layout if layout is not None else self.layout_engine.layout(graph)

    def truncate(self, text: str, max_chars: int) -> str:
        """Cut ``text`` to ``max_chars``, ending with an ellipsis when shortened."""
        if max_chars <= 0:
            return ""
        if len(text) <= max_chars:
            return text
        if max_chars == 1:
            return "…"
        return text[:max_chars - 1] + "…"

    def content_lines(self, node: Node, max_chars: int) -> list:
        """Lines of the node's content band, trimmed to fit."""
        lines = node.content_text.splitlines()[:self.config.CONTENT_MAX_LINES]
        return [self.truncate(line, max_chars) for line in lines]

    def output_format(self, output_path: Union[str, Path]) -> str:
        suffix = Path(output_path).suffix.lower()
        if suffix not in self.config.SUPPORTED_FORMATS:
            supported = ", ".join(sorted(self.config.SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format {suffix!r}; use one of {supported}")
        return suffix.lstrip('.')

    # ========== Abstract Interface ==========

    @abstractmethod
    def render(self, graph: Graph, output_path: Union[str, Path],
               layout: Optional[GraphLayout] = None) -> Path:
        """Draw ``graph`` to ``output_path`` and return the written path."""
