"""
Canonical graph models for dynview.

Every schema variant a document may be written in is normalized into these
models. The layout engine and the renderers only ever see this shape.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import Field, model_validator

from .base import BaseModel


class PortSide(str, Enum):
    """Which column of a node a port belongs to."""

    INPUT = "input"
    OUTPUT = "output"


class Position(BaseModel):
    """Canvas coordinate; origin top-left, y grows downward."""

    x: float = Field(default=0.0, description="Horizontal coordinate")
    y: float = Field(default=0.0, description="Vertical coordinate")


class Port(BaseModel):
    """
    A named, indexed connection point on a node.

    ``id`` is the identifier the source document used for the port. It is only
    needed while connectors are resolved and plays no part in rendering.
    """

    name: str = Field(..., description="Display name")
    index: int = Field(..., ge=0, description="Zero-based index within its side")
    side: PortSide = Field(..., description="Input or output column")
    id: str = Field(default="", description="Schema-native port identifier")


class Node(BaseModel):
    """A single operation box in the graph."""

    id: str = Field(default="", description="Unique node identifier")
    name: str = Field(default="", description="Node name")
    nickname: str = Field(default="", description="User-assigned label")
    node_type: str = Field(default="", description="Free-form node type tag")
    code: str = Field(default="", description="Inline code text")
    input_value: str = Field(default="", description="Literal input text")
    inputs: List[Port] = Field(default_factory=list, description="Input ports in order")
    outputs: List[Port] = Field(default_factory=list, description="Output ports in order")
    position: Position = Field(default_factory=Position, description="Top-left corner on the canvas")

    @property
    def display_label(self) -> str:
        """Nickname when it is non-blank, otherwise the name."""
        return self.nickname if self.nickname.strip() else self.name

    @property
    def content_text(self) -> str:
        """Text shown in the content band; code wins over the input value."""
        if self.code.strip():
            return self.code
        if self.input_value.strip():
            return self.input_value
        return ""

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def ports(self, side: PortSide) -> List[Port]:
        """Return the ports of one side."""
        return self.inputs if PortSide(side) is PortSide.INPUT else self.outputs


class Connector(BaseModel):
    """A directed edge from an output port to an input port."""

    source_node_id: str = Field(..., description="Node owning the output port")
    source_index: int = Field(default=0, description="Output port index")
    target_node_id: str = Field(..., description="Node owning the input port")
    target_index: int = Field(default=0, description="Input port index")


class NodeView(BaseModel):
    """Per-node view record from the document's view section."""

    id: str = Field(default="", description="Identifier of the node it describes")
    x: float = Field(default=0.0, description="Horizontal position")
    y: float = Field(default=0.0, description="Vertical position")
    is_collapsed: bool = Field(default=False, description="Whether the node is collapsed")
    name: str = Field(default="", description="Display name stored in the view section")


class ViewMetadata(BaseModel):
    """Viewport and per-node layout information."""

    x: float = Field(default=0.0, description="Viewport origin x")
    y: float = Field(default=0.0, description="Viewport origin y")
    zoom: float = Field(default=1.0, description="Zoom factor")
    node_views: List[NodeView] = Field(default_factory=list, description="Per-node view records")


class Graph(BaseModel):
    """
    Canonical normalized representation of one document.

    Node order is document order and is the rendering order.
    """

    id: str = Field(default="", description="Document identifier")
    name: str = Field(default="", description="Document name")
    nodes: List[Node] = Field(default_factory=list, description="Nodes in document order")
    connectors: List[Connector] = Field(default_factory=list, description="Connectors in document order")
    view: ViewMetadata = Field(default_factory=ViewMetadata, description="View metadata")

    @model_validator(mode='after')
    def validate_unique_node_ids(self):
        """Node identifiers must be unique within a graph."""
        seen = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node identifier: {node.id!r}")
            seen.add(node.id)
        return self

    def node_index(self) -> Dict[str, Node]:
        """Map node identifiers to nodes."""
        return {node.id: node for node in self.nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node by its ID."""
        return next((n for n in self.nodes if n.id == node_id), None)

    def connectors_for_node(self, node_id: str) -> List[Connector]:
        """Get all connectors touching a specific node."""
        return [
            c for c in self.connectors
            if c.source_node_id == node_id or c.target_node_id == node_id
        ]

    def summary(self) -> Dict[str, int]:
        return {
            'nodes': len(self.nodes),
            'connectors': len(self.connectors),
            'node_views': len(self.view.node_views),
        }
