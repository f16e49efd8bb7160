import pytest
from pydantic import ValidationError

from dynview.models import Connector, Graph, Node, Port, PortSide, Position


def test_display_label_prefers_non_blank_nickname():
    assert Node(name="Add", nickname="Sum").display_label == "Sum"
    assert Node(name="Add", nickname="   ").display_label == "Add"
    assert Node(name="Add").display_label == "Add"


def test_content_text_prefers_code_over_input_value():
    assert Node(code="a + b;", input_value="5").content_text == "a + b;"
    assert Node(code="  ", input_value="5").content_text == "5"
    assert Node(code="", input_value=" \n").content_text == ""


def test_node_defaults():
    node = Node()

    assert node.id == ""
    assert node.inputs == [] and node.outputs == []
    assert (node.x, node.y) == (0.0, 0.0)


def test_ports_by_side():
    node = Node(
        inputs=[Port(name="x", index=0, side=PortSide.INPUT)],
        outputs=[Port(name="r", index=0, side=PortSide.OUTPUT)],
    )

    assert node.ports(PortSide.INPUT)[0].name == "x"
    assert node.ports("output")[0].name == "r"


def test_port_index_must_not_be_negative():
    with pytest.raises(ValidationError):
        Port(name="x", index=-1, side=PortSide.INPUT)


def test_graph_rejects_duplicate_node_ids():
    with pytest.raises(ValidationError):
        Graph(nodes=[Node(id="a"), Node(id="a")])


def test_graph_lookups():
    graph = Graph(
        nodes=[Node(id="a", position=Position(x=1, y=2)), Node(id="b")],
        connectors=[Connector(source_node_id="a", target_node_id="b")],
    )

    assert graph.get_node("a").position.x == 1
    assert graph.get_node("zzz") is None
    assert set(graph.node_index()) == {"a", "b"}
    assert len(graph.connectors_for_node("b")) == 1
    assert graph.summary() == {"nodes": 2, "connectors": 1, "node_views": 0}


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        Node(id="a", colour="red")
