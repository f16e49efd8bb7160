"""
Multi-schema document reader.
"""

from .normalizer import SchemaNormalizer, normalize, parse_document
from .variants import (
    CONNECTOR_SECTIONS,
    ENDPOINT_VARIANTS,
    ConnectorSection,
    Endpoint,
    EndpointVariant,
    FieldAliases,
    ObjectEndpoint,
    PortIdEndpoint,
    PortRef,
)

__all__ = [
    "SchemaNormalizer",
    "normalize",
    "parse_document",
    "CONNECTOR_SECTIONS",
    "ENDPOINT_VARIANTS",
    "ConnectorSection",
    "Endpoint",
    "EndpointVariant",
    "FieldAliases",
    "ObjectEndpoint",
    "PortIdEndpoint",
    "PortRef",
]
