"""
Schema-variant strategies.

Different releases of the authoring tool wrote the same logical graph with
different field names and connector shapes. Each known difference is declared
here as a small named object, and the normalizer tries them in the fixed order
listed. Supporting a newly observed variant means appending one entry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from ..models import PortSide
from .fields import as_int, as_list, as_object, first_list, first_text


class PortRef(NamedTuple):
    """Where a schema-native port identifier lives."""

    node_id: str
    index: int
    side: PortSide


class Endpoint(NamedTuple):
    """A resolved connector end: node identifier plus port index."""

    node_id: str
    index: int


@dataclass(frozen=True)
class FieldAliases:
    """Ordered alternative spellings of one logical field; the first non-blank wins."""

    name: str
    keys: Tuple[str, ...]

    def text(self, obj: Dict[str, Any]) -> str:
        return first_text(obj, self.keys)

    def items(self, obj: Dict[str, Any]) -> Optional[List[Any]]:
        return first_list(obj, self.keys)


NICKNAME = FieldAliases("nickname", ("Nickname", "NickName"))
INPUT_PORTS = FieldAliases("input ports", ("Inputs", "InPorts"))
OUTPUT_PORTS = FieldAliases("output ports", ("Outputs", "OutPorts"))
PORT_NAME = FieldAliases("port name", ("Name", "Description"))
ENDPOINT_NODE_ID = FieldAliases("endpoint node id", ("NodeId", "Guid"))

PORT_COLLECTIONS = {
    PortSide.INPUT: INPUT_PORTS,
    PortSide.OUTPUT: OUTPUT_PORTS,
}

PLACEHOLDER_PREFIXES = {
    PortSide.INPUT: "In",
    PortSide.OUTPUT: "Out",
}


def placeholder_port_name(side: PortSide, index: int) -> str:
    """Name used for a port whose document entry carries no usable name."""
    return f"{PLACEHOLDER_PREFIXES[side]}{index}"


# ========== Connector endpoints ==========

class EndpointVariant(ABC):
    """One way a connector's ``Start``/``End`` value may be written."""

    name: str = ""

    @abstractmethod
    def matches(self, raw: Any) -> bool:
        """Whether ``raw`` is written in this variant's shape."""

    @abstractmethod
    def resolve(self, raw: Any, port_lookup: Mapping[str, PortRef]) -> Optional[Endpoint]:
        """Resolve ``raw`` to an endpoint, or ``None`` when it points nowhere."""


class ObjectEndpoint(EndpointVariant):
    """``{"NodeId": "...", "Index": 1}`` (older files use ``Guid`` for the node)."""

    name = "object"

    def matches(self, raw: Any) -> bool:
        return isinstance(raw, dict)

    def resolve(self, raw: Any, port_lookup: Mapping[str, PortRef]) -> Optional[Endpoint]:
        node_id = ENDPOINT_NODE_ID.text(raw)
        if not node_id:
            return None
        return Endpoint(node_id, as_int(raw.get("Index"), 0))


class PortIdEndpoint(EndpointVariant):
    """A bare string naming a port identifier declared on some node."""

    name = "port-id"

    def matches(self, raw: Any) -> bool:
        return isinstance(raw, str)

    def resolve(self, raw: Any, port_lookup: Mapping[str, PortRef]) -> Optional[Endpoint]:
        ref = port_lookup.get(raw)
        if ref is None:
            return None
        return Endpoint(ref.node_id, ref.index)


ENDPOINT_VARIANTS: Tuple[EndpointVariant, ...] = (ObjectEndpoint(), PortIdEndpoint())


def resolve_endpoint(raw: Any, port_lookup: Mapping[str, PortRef],
                     variants: Sequence[EndpointVariant] = ENDPOINT_VARIANTS) -> Optional[Endpoint]:
    """Resolve ``raw`` with the first variant whose shape matches."""
    for variant in variants:
        if variant.matches(raw):
            return variant.resolve(raw, port_lookup)
    return None


# ========== Connector collections ==========

@dataclass(frozen=True)
class ConnectorSection:
    """A place in the document where a ``Connectors`` list may live."""

    name: str
    path: Tuple[str, ...] = ()

    def locate(self, document: Dict[str, Any]) -> Optional[List[Any]]:
        container: Optional[Dict[str, Any]] = document
        for key in self.path:
            container = as_object(container.get(key))
            if container is None:
                return None
        return as_list(container.get("Connectors"))


CONNECTOR_SECTIONS: Tuple[ConnectorSection, ...] = (
    ConnectorSection("top-level"),
    ConnectorSection("workspace", ("Workspace",)),
    ConnectorSection("view", ("View",)),
)


def locate_connectors(document: Dict[str, Any],
                      sections: Sequence[ConnectorSection] = CONNECTOR_SECTIONS
                      ) -> Tuple[Optional[ConnectorSection], List[Any]]:
    """Return the first section holding a connector list, and that list."""
    for section in sections:
        items = section.locate(document)
        if items is not None:
            return section, items
    return None, []
