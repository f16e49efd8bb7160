"""
dynview: read visual-programming graph documents written by any known schema
version, normalize them into one canonical model, and lay them out.

This package provides tools for:
- Normalizing multi-schema graph JSON into a canonical Graph
- Computing node sizes, port anchors and connector curves
- Rendering graphs to image files and exporting them to GraphML
"""

from dotenv import find_dotenv, load_dotenv

# Load .env before any submodule builds the cached settings
load_dotenv(find_dotenv(usecwd=True))

from .client import GraphLoader, LoadedGraph, load_graph, read_document
from .config import LayoutConfig, Settings, get_settings
from .exceptions import (
    DynViewError,
    MalformedDocumentError,
    DocumentReadError,
    ConfigurationError,
    RenderError,
)
from .layout import (
    LayoutEngine,
    GraphLayout,
    NodeGeometry,
    Point,
    CubicCurve,
    node_width,
    node_height,
    has_content_band,
    port_anchor,
    connector_path,
)
from .models import Graph, Node, Port, PortSide, Connector, NodeView, ViewMetadata
from .normalizer import SchemaNormalizer, normalize

__version__ = "1.0.0"
__all__ = [
    "GraphLoader", "LoadedGraph", "load_graph", "read_document",
    "LayoutConfig", "Settings", "get_settings",
    "DynViewError", "MalformedDocumentError", "DocumentReadError", "ConfigurationError", "RenderError",
    "LayoutEngine", "GraphLayout", "NodeGeometry", "Point", "CubicCurve",
    "node_width", "node_height", "has_content_band", "port_anchor", "connector_path",
    "Graph", "Node", "Port", "PortSide", "Connector", "NodeView", "ViewMetadata",
    "SchemaNormalizer", "normalize",
]
