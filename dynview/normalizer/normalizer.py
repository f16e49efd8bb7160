"""
Schema normalizer: raw document text in, canonical Graph out.

Only an unparseable document is an error. Missing fields fall back to their
defaults and references that point nowhere are dropped, so documents that are
partially inconsistent across tool versions still produce a usable graph.
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Union

from ..exceptions import MalformedDocumentError
from ..models import Connector, Graph, Node, NodeView, Port, PortSide, Position, ViewMetadata
from ..monitoring.logger import get_logger
from .fields import as_bool, as_float, as_object, as_list, as_text, is_blank, objects
from .variants import (
    CONNECTOR_SECTIONS,
    ENDPOINT_VARIANTS,
    NICKNAME,
    PORT_COLLECTIONS,
    PORT_NAME,
    ConnectorSection,
    Endpoint,
    EndpointVariant,
    PortRef,
    locate_connectors,
    placeholder_port_name,
    resolve_endpoint,
)

logger = get_logger(__name__)

RawDocument = Union[str, bytes, bytearray]


def parse_document(raw: RawDocument) -> Dict[str, Any]:
    """
    Parse raw document text into a JSON object.

    Raises:
        MalformedDocumentError: if the input is not UTF-8, not JSON, or not a JSON object
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = bytes(raw).decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise MalformedDocumentError(f"Document is not valid UTF-8: {e}") from e
    else:
        text = raw[1:] if raw.startswith('\ufeff') else raw

    try:
        document = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the interpreter's digit limit
        raise MalformedDocumentError(f"Document is not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedDocumentError("Document is nested too deeply to parse") from e

    if not isinstance(document, dict):
        raise MalformedDocumentError(
            f"Document must be a JSON object, got {type(document).__name__}"
        )
    return document


class SchemaNormalizer:
    """
    Reconciles every known schema variant into one Graph.

    The variant strategies are injectable so that each one can be exercised in
    isolation; the defaults cover every variant seen in the wild.
    """

    def __init__(self,
                 endpoint_variants: Sequence[EndpointVariant] = ENDPOINT_VARIANTS,
                 connector_sections: Sequence[ConnectorSection] = CONNECTOR_SECTIONS):
        self.endpoint_variants = tuple(endpoint_variants)
        self.connector_sections = tuple(connector_sections)

    def normalize(self, raw: RawDocument) -> Graph:
        """
        Normalize one document.

        Args:
            raw: Document text (``str``) or undecoded UTF-8 bytes

        Returns:
            A new, independent Graph

        Raises:
            MalformedDocumentError: if the input is not parseable structured data
        """
        document = parse_document(raw)

        # Schema-native port id -> location; discarded once connectors are resolved
        port_lookup: Dict[str, PortRef] = {}

        nodes = self._read_nodes(document, port_lookup)
        connectors = self._read_connectors(document, nodes, port_lookup)
        view = self._read_view(document, nodes)

        graph = Graph(
            id=as_text(document.get("Uuid")),
            name=as_text(document.get("Name")),
            nodes=nodes,
            connectors=connectors,
            view=view,
        )
        logger.info(
            "Normalized graph %r: %d nodes, %d connectors, %d node views",
            graph.name, len(graph.nodes), len(graph.connectors), len(view.node_views)
        )
        return graph

    # ========== Nodes and ports ==========

    def _read_nodes(self, document: Dict[str, Any], port_lookup: Dict[str, PortRef]) -> List[Node]:
        nodes: List[Node] = []
        seen_ids = set()

        for raw_node in objects(as_list(document.get("Nodes"))):
            node_id = as_text(raw_node.get("Id"))
            if node_id in seen_ids:
                label = NICKNAME.text(raw_node) or as_text(raw_node.get("Name")) or "<unnamed>"
                if node_id:
                    logger.warning("Dropping node %r: identifier %r is already used", label, node_id)
                else:
                    logger.warning("Dropping node %r: it has no identifier and another node "
                                   "without one was already read", label)
                continue
            seen_ids.add(node_id)

            nodes.append(Node(
                id=node_id,
                name=as_text(raw_node.get("Name")),
                nickname=NICKNAME.text(raw_node),
                node_type=as_text(raw_node.get("NodeType")),
                code=as_text(raw_node.get("Code")),
                input_value=as_text(raw_node.get("InputValue")),
                inputs=self._read_ports(raw_node, node_id, PortSide.INPUT, port_lookup),
                outputs=self._read_ports(raw_node, node_id, PortSide.OUTPUT, port_lookup),
            ))

        return nodes

    def _read_ports(self, raw_node: Dict[str, Any], node_id: str, side: PortSide,
                    port_lookup: Dict[str, PortRef]) -> List[Port]:
        ports: List[Port] = []

        for index, raw_port in enumerate(objects(PORT_COLLECTIONS[side].items(raw_node))):
            port_id = as_text(raw_port.get("Id"))
            name = PORT_NAME.text(raw_port) or placeholder_port_name(side, index)
            ports.append(Port(name=name, index=index, side=side, id=port_id))
            if port_id:
                port_lookup[port_id] = PortRef(node_id, index, side)

        return ports

    # ========== Connectors ==========

    def _read_connectors(self, document: Dict[str, Any], nodes: List[Node],
                         port_lookup: Dict[str, PortRef]) -> List[Connector]:
        section, raw_connectors = locate_connectors(document, self.connector_sections)
        if section is not None and section is not self.connector_sections[0]:
            logger.debug("Reading connectors from the %s section", section.name)

        known_ids = {node.id for node in nodes}
        connectors: List[Connector] = []
        dropped = 0

        for position, raw_connector in enumerate(raw_connectors):
            if not isinstance(raw_connector, dict):
                dropped += 1
                continue

            start = self._resolve(raw_connector.get("Start"), port_lookup, known_ids)
            end = self._resolve(raw_connector.get("End"), port_lookup, known_ids)
            if start is None or end is None:
                logger.debug("Dropping connector #%d: endpoint does not resolve to a node", position)
                dropped += 1
                continue

            connectors.append(Connector(
                source_node_id=start.node_id,
                source_index=start.index,
                target_node_id=end.node_id,
                target_index=end.index,
            ))

        if dropped:
            logger.debug("Dropped %d unresolvable connectors", dropped)
        return connectors

    def _resolve(self, raw: Any, port_lookup: Dict[str, PortRef], known_ids) -> Optional[Endpoint]:
        endpoint = resolve_endpoint(raw, port_lookup, self.endpoint_variants)
        if endpoint is None or is_blank(endpoint.node_id) or endpoint.node_id not in known_ids:
            return None
        return endpoint

    # ========== View ==========

    def _read_view(self, document: Dict[str, Any], nodes: List[Node]) -> ViewMetadata:
        raw_view = as_object(document.get("View"))
        if raw_view is None:
            return ViewMetadata()

        view = ViewMetadata(
            x=as_float(raw_view.get("X")),
            y=as_float(raw_view.get("Y")),
            zoom=as_float(raw_view.get("Zoom"), 1.0),
        )

        by_id = {node.id: node for node in nodes}
        placed = set()

        for raw_node_view in objects(as_list(raw_view.get("NodeViews"))):
            record = NodeView(
                id=as_text(raw_node_view.get("Id")),
                x=as_float(raw_node_view.get("X")),
                y=as_float(raw_node_view.get("Y")),
                is_collapsed=as_bool(raw_node_view.get("IsCollapsed")),
                name=as_text(raw_node_view.get("Name")),
            )
            view.node_views.append(record)

            node = by_id.get(record.id)
            if node is None:
                logger.debug("Ignoring view record for unknown node %r", record.id)
                continue
            if record.id in placed:
                logger.debug("Ignoring repeated view record for node %r", record.id)
                continue
            placed.add(record.id)

            # The only place a node's position is ever set
            node.position = Position(x=record.x, y=record.y)
            if is_blank(node.name):
                node.name = record.name

        return view


_default_normalizer = SchemaNormalizer()


def normalize(raw: RawDocument) -> Graph:
    """Normalize ``raw`` with the default schema-variant strategies."""
    return _default_normalizer.normalize(raw)
