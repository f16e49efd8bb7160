"""
Layout geometry engine.

Pure functions that derive node size, port anchor points and connector curves
from a normalized Graph. Nothing here keeps state between calls; the same node
and config always produce the same numbers.

Node drawing and connector anchoring must agree on every coordinate, so both
go through ``LayoutEngine.layout``, which measures each node exactly once and
anchors every connector from that single measurement.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..config.layout import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from ..models import Connector, Graph, Node, Port, PortSide
from ..monitoring.logger import get_logger

logger = get_logger(__name__)

Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class CubicCurve:
    """Cubic Bezier segment from ``start`` to ``end``."""

    start: Point
    control1: Point
    control2: Point
    end: Point

    @property
    def points(self) -> Tuple[Point, Point, Point, Point]:
        return (self.start, self.control1, self.control2, self.end)

    def point_at(self, t: float) -> Point:
        """Evaluate the curve at parameter ``t`` in [0, 1]."""
        u = 1.0 - t
        weights = (u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t)
        x = sum(w * p.x for w, p in zip(weights, self.points))
        y = sum(w * p.y for w, p in zip(weights, self.points))
        return Point(x, y)

    def sample(self, steps: int = 32) -> np.ndarray:
        """Return ``steps`` evenly spaced points along the curve as an (N, 2) array."""
        if steps < 2:
            raise ValueError("steps must be at least 2")
        t = np.linspace(0.0, 1.0, steps)[:, None]
        u = 1.0 - t
        p = np.array([[pt.x, pt.y] for pt in self.points], dtype=float)
        return (u ** 3) * p[0] + 3 * (u ** 2) * t * p[1] + 3 * u * (t ** 2) * p[2] + (t ** 3) * p[3]

    def bounds(self, steps: int = 64) -> Bounds:
        """Axis-aligned bounds (min_x, min_y, max_x, max_y) of the drawn curve."""
        samples = self.sample(steps)
        min_x, min_y = samples.min(axis=0)
        max_x, max_y = samples.max(axis=0)
        return (float(min_x), float(min_y), float(max_x), float(max_y))


# ========== Sizing ==========

def label_width(text: str, char_width: float) -> float:
    """Approximate rendered width of ``text``."""
    return len(text or "") * char_width


def _widest_label(ports: List[Port], char_width: float) -> float:
    return max((label_width(p.name, char_width) for p in ports), default=0.0)


def node_width(node: Node, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> float:
    """
    Width of a node: the largest of the minimum width, the title width and
    the two port-label columns side by side.
    """
    title = label_width(node.display_label, config.title_char_width) + config.title_padding
    columns = (
        _widest_label(node.inputs, config.port_char_width)
        + _widest_label(node.outputs, config.port_char_width)
        + config.port_column_gap
    )
    return max(config.min_node_width, title, columns)


def has_content_band(node: Node) -> bool:
    """True when the node shows code or a literal value above its ports."""
    return bool(node.content_text)


def content_band_offset(node: Node, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> float:
    """Downward shift applied to every port row of ``node``."""
    return config.content_allowance if has_content_band(node) else 0.0


def node_height(node: Node, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> float:
    rows = max(len(node.inputs), len(node.outputs))
    ports_height = rows * config.row_pitch + config.header_allowance
    return max(config.min_node_height, ports_height + content_band_offset(node, config))


# ========== Anchors and curves ==========

def _anchor(x: float, y: float, width: float, content_offset: float,
            port_index: int, side: PortSide, config: LayoutConfig) -> Point:
    anchor_y = (
        y
        + config.header_offset
        + content_offset
        + port_index * config.row_pitch
        + config.port_marker_size / 2
    )
    anchor_x = x if PortSide(side) is PortSide.INPUT else x + width
    return Point(anchor_x, anchor_y)


def port_anchor(node: Node, port_index: int, side: PortSide,
                config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> Point:
    """
    Connection point of one port.

    Input ports sit on the node's left edge, output ports on its right edge.
    The index is not checked against the node's port count; an index past the
    last port is placed where that row would be.
    """
    return _anchor(
        node.x, node.y, node_width(node, config), content_band_offset(node, config),
        port_index, side, config,
    )


def connector_path(source: Point, target: Point,
                   config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> CubicCurve:
    """
    Curve from an output anchor to an input anchor.

    Control points keep their endpoint's y (horizontal tangents) and are
    pushed out by half the horizontal span, never less than the configured
    minimum, so stacked nodes still get a visible curve.
    """
    offset = max(abs(target.x - source.x) / 2, config.min_curve_offset)
    return CubicCurve(
        start=source,
        control1=Point(source.x + offset, source.y),
        control2=Point(target.x - offset, target.y),
        end=target,
    )


# ========== Precomputed layout ==========

@dataclass(frozen=True)
class NodeGeometry:
    """Measured box and port anchors of one node."""

    node_id: str
    x: float
    y: float
    width: float
    height: float
    content_offset: float
    input_anchors: Tuple[Point, ...]
    output_anchors: Tuple[Point, ...]
    config: LayoutConfig = field(default=DEFAULT_LAYOUT_CONFIG, repr=False)

    @property
    def has_content_band(self) -> bool:
        return self.content_offset > 0

    @property
    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def anchors(self, side: PortSide) -> Tuple[Point, ...]:
        return self.input_anchors if PortSide(side) is PortSide.INPUT else self.output_anchors

    def has_port(self, side: PortSide, port_index: int) -> bool:
        return 0 <= port_index < len(self.anchors(side))

    def anchor(self, side: PortSide, port_index: int) -> Point:
        """Anchor of a port; rows past the last port are extrapolated."""
        if self.has_port(side, port_index):
            return self.anchors(side)[port_index]
        return _anchor(self.x, self.y, self.width, self.content_offset,
                       port_index, side, self.config)


@dataclass(frozen=True)
class ConnectorLayout:
    connector: Connector
    curve: CubicCurve
    in_range: bool = True


@dataclass
class GraphLayout:
    """Geometry for a whole graph, computed once and only read afterwards."""

    config: LayoutConfig
    nodes: Dict[str, NodeGeometry] = field(default_factory=dict)
    connectors: List[ConnectorLayout] = field(default_factory=list)

    def geometry(self, node_id: str) -> Optional[NodeGeometry]:
        return self.nodes.get(node_id)

    def bounds(self) -> Optional[Bounds]:
        """Union of every node box and connector curve, or ``None`` when empty."""
        boxes = [g.bounds for g in self.nodes.values()]
        boxes.extend(c.curve.bounds() for c in self.connectors)
        if not boxes:
            return None
        corners = np.array(boxes, dtype=float)
        return (
            float(corners[:, 0].min()),
            float(corners[:, 1].min()),
            float(corners[:, 2].max()),
            float(corners[:, 3].max()),
        )


class LayoutEngine:
    """Measures nodes and anchors connectors with one shared LayoutConfig."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or DEFAULT_LAYOUT_CONFIG

    def measure(self, node: Node) -> NodeGeometry:
        width = node_width(node, self.config)
        offset = content_band_offset(node, self.config)

        def anchors(side: PortSide) -> Tuple[Point, ...]:
            return tuple(
                _anchor(node.x, node.y, width, offset, port.index, side, self.config)
                for port in node.ports(side)
            )

        return NodeGeometry(
            node_id=node.id,
            x=node.x,
            y=node.y,
            width=width,
            height=node_height(node, self.config),
            content_offset=offset,
            input_anchors=anchors(PortSide.INPUT),
            output_anchors=anchors(PortSide.OUTPUT),
            config=self.config,
        )

    def layout(self, graph: Graph) -> GraphLayout:
        result = GraphLayout(config=self.config)
        for node in graph.nodes:
            result.nodes[node.id] = self.measure(node)

        for connector in graph.connectors:
            source = result.nodes.get(connector.source_node_id)
            target = result.nodes.get(connector.target_node_id)
            if source is None or target is None:
                logger.debug("Skipping connector with unknown node: %s", connector)
                continue

            in_range = (
                source.has_port(PortSide.OUTPUT, connector.source_index)
                and target.has_port(PortSide.INPUT, connector.target_index)
            )
            if not in_range:
                logger.debug("Connector port index out of range, extrapolating: %s", connector)

            curve = connector_path(
                source.anchor(PortSide.OUTPUT, connector.source_index),
                target.anchor(PortSide.INPUT, connector.target_index),
                self.config,
            )
            result.connectors.append(ConnectorLayout(connector, curve, in_range))

        return result
