import json

from dynview.models import PortSide
from dynview.normalizer import (
    ConnectorSection,
    Endpoint,
    FieldAliases,
    ObjectEndpoint,
    PortIdEndpoint,
    PortRef,
    SchemaNormalizer,
)
from dynview.normalizer.fields import MAX_INT, as_float, as_int
from dynview.normalizer.variants import (
    NICKNAME,
    INPUT_PORTS,
    locate_connectors,
    placeholder_port_name,
    resolve_endpoint,
)

LOOKUP = {"p-1": PortRef("node-a", 2, PortSide.OUTPUT)}


def test_field_aliases_first_non_blank_wins():
    aliases = FieldAliases("label", ("Primary", "Secondary"))

    assert aliases.text({"Primary": "one", "Secondary": "two"}) == "one"
    assert aliases.text({"Primary": "  ", "Secondary": "two"}) == "two"
    assert aliases.text({}) == ""


def test_nickname_spellings():
    assert NICKNAME.text({"Nickname": "new"}) == "new"
    assert NICKNAME.text({"NickName": "old"}) == "old"


def test_port_collection_prefers_first_list():
    raw = {"Inputs": [{"Name": "a"}], "InPorts": [{"Name": "b"}]}
    assert INPUT_PORTS.items(raw) == [{"Name": "a"}]

    raw = {"Inputs": None, "InPorts": [{"Name": "b"}]}
    assert INPUT_PORTS.items(raw) == [{"Name": "b"}]

    assert INPUT_PORTS.items({}) is None


def test_placeholder_port_names():
    assert placeholder_port_name(PortSide.INPUT, 2) == "In2"
    assert placeholder_port_name(PortSide.OUTPUT, 0) == "Out0"


def test_object_endpoint():
    variant = ObjectEndpoint()

    assert variant.matches({"NodeId": "x"})
    assert not variant.matches("x")
    assert variant.resolve({"NodeId": "x", "Index": 3}, LOOKUP) == Endpoint("x", 3)
    assert variant.resolve({"Guid": "y"}, LOOKUP) == Endpoint("y", 0)
    assert variant.resolve({"Index": 1}, LOOKUP) is None


def test_object_endpoint_tolerates_loose_index_types():
    variant = ObjectEndpoint()

    assert variant.resolve({"NodeId": "x", "Index": "1"}, LOOKUP) == Endpoint("x", 1)
    assert variant.resolve({"NodeId": "x", "Index": 2.0}, LOOKUP) == Endpoint("x", 2)
    assert variant.resolve({"NodeId": "x", "Index": "first"}, LOOKUP) == Endpoint("x", 0)


def test_port_id_endpoint():
    variant = PortIdEndpoint()

    assert variant.matches("p-1")
    assert not variant.matches({"NodeId": "x"})
    assert variant.resolve("p-1", LOOKUP) == Endpoint("node-a", 2)
    assert variant.resolve("unknown", LOOKUP) is None


def test_resolve_endpoint_uses_first_matching_variant():
    assert resolve_endpoint("p-1", LOOKUP) == Endpoint("node-a", 2)
    assert resolve_endpoint({"NodeId": "n"}, LOOKUP) == Endpoint("n", 0)
    assert resolve_endpoint(42, LOOKUP) is None
    assert resolve_endpoint(None, LOOKUP) is None
    assert resolve_endpoint("p-1", LOOKUP, variants=(ObjectEndpoint(),)) is None


def test_connector_section_locate():
    document = {"Workspace": {"Connectors": [1]}, "View": {"Connectors": [2]}}

    assert ConnectorSection("top-level").locate(document) is None
    assert ConnectorSection("workspace", ("Workspace",)).locate(document) == [1]
    assert ConnectorSection("missing", ("Nope",)).locate(document) is None


def test_locate_connectors_priority():
    document = {"Connectors": [0], "Workspace": {"Connectors": [1]}}
    section, items = locate_connectors(document)
    assert section.name == "top-level" and items == [0]

    document = {"Workspace": {"Connectors": [1]}, "View": {"Connectors": [2]}}
    section, items = locate_connectors(document)
    assert section.name == "workspace" and items == [1]

    document = {"View": {"Connectors": [2]}}
    section, items = locate_connectors(document)
    assert section.name == "view" and items == [2]

    assert locate_connectors({}) == (None, [])


def test_normalizer_with_only_object_endpoints_ignores_port_ids(port_id_doc):
    normalizer = SchemaNormalizer(endpoint_variants=(ObjectEndpoint(),))

    graph = normalizer.normalize(json.dumps(port_id_doc))

    assert graph.connectors == []
    assert len(graph.nodes) == 2


def test_object_endpoint_rejects_oversized_index():
    variant = ObjectEndpoint()
    huge = 10 ** 400

    assert variant.resolve({"NodeId": "x", "Index": huge}, LOOKUP) == Endpoint("x", 0)
    assert variant.resolve({"NodeId": "x", "Index": str(huge)}, LOOKUP) == Endpoint("x", 0)
    assert variant.resolve({"NodeId": "x", "Index": 1e300}, LOOKUP) == Endpoint("x", 0)
    assert variant.resolve({"NodeId": "x", "Index": MAX_INT}, LOOKUP) == Endpoint("x", MAX_INT)


def test_oversized_numbers_fall_back_to_defaults():
    assert as_int(-(10 ** 40)) == 0
    assert as_int(MAX_INT + 1, default=7) == 7
    assert as_float(10 ** 400) == 0.0
    assert as_float("1e400", default=1.0) == 1.0
