"""
Layout geometry: node sizing, port anchors and connector curves.
"""

from .geometry import (
    Point,
    CubicCurve,
    NodeGeometry,
    ConnectorLayout,
    GraphLayout,
    LayoutEngine,
    label_width,
    node_width,
    node_height,
    has_content_band,
    content_band_offset,
    port_anchor,
    connector_path,
)

__all__ = [
    "Point",
    "CubicCurve",
    "NodeGeometry",
    "ConnectorLayout",
    "GraphLayout",
    "LayoutEngine",
    "label_width",
    "node_width",
    "node_height",
    "has_content_band",
    "content_band_offset",
    "port_anchor",
    "connector_path",
]
