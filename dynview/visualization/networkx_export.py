"""
NetworkX export of a normalized graph and its geometry.

Hands the canonical model to tools that speak networkx (analysis notebooks,
GraphML consumers) with every attribute flattened to a scalar so it survives
GraphML serialization.
"""

from pathlib import Path
from typing import Optional, Union

import networkx as nx

from ..exceptions import RenderError
from ..layout import GraphLayout, LayoutEngine
from ..models import Graph
from ..monitoring.logger import get_logger

logger = get_logger(__name__)


def to_networkx(graph: Graph, layout: Optional[GraphLayout] = None) -> nx.MultiDiGraph:
    """
    Build a MultiDiGraph with one node per graph node and one edge per connector.

    Node attributes carry labels, type, position and measured size; edge
    attributes carry the port indices and the curve's control points. Edge keys
    are the connector's position in the graph's connector list.
    """
    layout = layout or LayoutEngine().layout(graph)

    G = nx.MultiDiGraph(id=graph.id, name=graph.name, zoom=graph.view.zoom)

    for node in graph.nodes:
        geometry = layout.nodes[node.id]
        G.add_node(
            node.id,
            label=node.display_label,
            name=node.name,
            nickname=node.nickname,
            node_type=node.node_type,
            content=node.content_text,
            inputs=len(node.inputs),
            outputs=len(node.outputs),
            x=geometry.x,
            y=geometry.y,
            width=geometry.width,
            height=geometry.height,
        )

    for key, connector_layout in enumerate(layout.connectors):
        connector = connector_layout.connector
        curve = connector_layout.curve
        G.add_edge(
            connector.source_node_id,
            connector.target_node_id,
            key=key,
            source_index=connector.source_index,
            target_index=connector.target_index,
            in_range=connector_layout.in_range,
            c1_x=curve.control1.x,
            c1_y=curve.control1.y,
            c2_x=curve.control2.x,
            c2_y=curve.control2.y,
        )

    return G


def write_graphml(graph: Graph, output_path: Union[str, Path],
                  layout: Optional[GraphLayout] = None) -> Path:
    """Export ``graph`` as GraphML.

    Raises:
        RenderError: if the file cannot be written
    """
    output_path = Path(output_path)
    G = to_networkx(graph, layout)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_graphml(G, output_path)
    except OSError as e:
        raise RenderError(f"Could not write {output_path}: {e}") from e

    logger.info("Exported %d nodes and %d edges to %s",
                G.number_of_nodes(), G.number_of_edges(), output_path)
    return output_path
