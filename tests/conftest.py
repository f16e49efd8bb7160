import json
import os
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

from dynview.config import settings as settings_module  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Keep DYNVIEW_* variables from the developer's shell out of the tests and
    clear the settings cache between tests.
    """
    for key in list(os.environ):
        if key.startswith("DYNVIEW_"):
            monkeypatch.delenv(key, raising=False)
    settings_module.reload_settings()
    yield
    settings_module.reload_settings()


def port_id_document():
    """Newer schema: ports carry ids, connectors reference them as bare strings."""
    return {
        "Uuid": "3c9d0464-8643-5ffe-96e5-ab1769818209",
        "Name": "Port id graph",
        "Nodes": [
            {
                "Id": "number-node",
                "NodeType": "NumberInputNode",
                "InputValue": "5",
                "Inputs": [],
                "Outputs": [{"Id": "num-out", "Name": "", "Description": "Double"}],
            },
            {
                "Id": "add-node",
                "NodeType": "FunctionNode",
                "Inputs": [
                    {"Id": "add-x", "Name": "x", "Description": "Integer value"},
                    {"Id": "add-y", "Name": "y", "Description": "Integer value"},
                ],
                "Outputs": [{"Id": "add-out", "Name": "int", "Description": "sum"}],
            },
        ],
        "Connectors": [
            {"Start": "num-out", "End": "add-x", "Id": "c1"},
            {"Start": "num-out", "End": "add-y", "Id": "c2"},
            {"Start": "stale-port", "End": "add-x", "Id": "c3"},
        ],
        "View": {
            "X": -12.5,
            "Y": 40.0,
            "Zoom": 0.75,
            "NodeViews": [
                {"Id": "number-node", "Name": "Number", "X": 100.0, "Y": 200.0, "IsCollapsed": False},
                {"Id": "add-node", "Name": "+", "X": 400.0, "Y": 180.0},
            ],
        },
    }


def object_endpoint_document():
    """Older schema: endpoints are objects with a node id and an index."""
    return {
        "Uuid": "legacy-graph",
        "Name": "Legacy",
        "Nodes": [
            {
                "Id": "a",
                "Name": "Point.ByCoordinates",
                "NickName": "Origin",
                "InPorts": [{"Name": "x"}, {"Name": "y"}],
                "OutPorts": [{"Name": "Point"}],
            },
            {
                "Id": "b",
                "Name": "Code Block",
                "Code": "p.X + 1;",
                "InPorts": [{"Name": "p"}],
                "OutPorts": [{"Description": "result"}],
            },
        ],
        "Connectors": [
            {"Start": {"NodeId": "a", "Index": 0}, "End": {"Guid": "b", "Index": 0}},
            {"Start": {"NodeId": "missing-node", "Index": 0}, "End": {"NodeId": "b", "Index": 0}},
        ],
    }


@pytest.fixture
def port_id_doc():
    return port_id_document()


@pytest.fixture
def object_endpoint_doc():
    return object_endpoint_document()


@pytest.fixture
def port_id_json():
    return json.dumps(port_id_document())


@pytest.fixture
def object_endpoint_json():
    return json.dumps(object_endpoint_document())


@pytest.fixture
def write_document(tmp_path: Path):
    """Write a document (dict or raw text) to a temporary .dyn file."""
    def _write(content, name="graph.dyn") -> Path:
        path = tmp_path / name
        if isinstance(content, dict):
            content = json.dumps(content)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
