"""
Canonical graph models for dynview.
"""

from .base import BaseModel
from .graph import Graph, Node, Port, PortSide, Position, Connector, NodeView, ViewMetadata

__all__ = [
    # Graph models
    "Graph",
    "Node",
    "Port",
    "PortSide",
    "Position",
    "Connector",
    "NodeView",
    "ViewMetadata",
    # Base models
    "BaseModel",
]
