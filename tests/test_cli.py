from dynview.cli import build_parser, main
from dynview.config import reload_settings


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: dynview" in capsys.readouterr().out


def test_info(write_document, port_id_doc, capsys):
    path = write_document(port_id_doc)

    assert main(["info", str(path)]) == 0

    out = capsys.readouterr().out
    assert "Loaded: graph.dyn | Nodes: 2, Connectors: 2" in out
    assert "Port id graph" in out
    assert "zoom 0.75" in out


def test_info_with_geometry(write_document, object_endpoint_doc, capsys):
    path = write_document(object_endpoint_doc)

    assert main(["info", str(path), "--geometry"]) == 0

    out = capsys.readouterr().out
    assert "Origin @ (0, 0) size 160x80" in out
    assert "Code Block @ (0, 0)" in out


def test_info_reports_out_of_range_connectors(write_document, capsys):
    document = {
        "Nodes": [{"Id": "a"}, {"Id": "b"}],
        "Connectors": [{"Start": {"NodeId": "a", "Index": 4}, "End": {"NodeId": "b"}}],
    }

    assert main(["info", str(write_document(document))]) == 0
    assert "1 connectors reference ports past the end" in capsys.readouterr().out


def test_info_missing_file(tmp_path, capsys):
    assert main(["info", str(tmp_path / "missing.dyn")]) == 1
    assert "❌ Error" in capsys.readouterr().out


def test_info_malformed_file(write_document, capsys):
    assert main(["info", str(write_document("not json"))]) == 1
    assert "not valid JSON" in capsys.readouterr().out


def test_render_to_explicit_output(tmp_path, write_document, port_id_doc):
    output = tmp_path / "out.png"

    assert main(["render", str(write_document(port_id_doc)), "-o", str(output), "--dpi", "40"]) == 0
    assert output.exists()


def test_render_defaults_to_output_dir(tmp_path, monkeypatch, write_document, port_id_doc, capsys):
    monkeypatch.setenv("DYNVIEW_OUTPUT_DIR", str(tmp_path / "renders"))
    monkeypatch.setenv("DYNVIEW_RENDER_DPI", "40")
    reload_settings()

    assert main(["render", str(write_document(port_id_doc, name="adder.dyn"))]) == 0
    assert (tmp_path / "renders" / "adder.png").exists()
    assert "Rendered to" in capsys.readouterr().out


def test_render_unsupported_format(tmp_path, write_document, port_id_doc, capsys):
    output = tmp_path / "out.gif"

    assert main(["render", str(write_document(port_id_doc)), "-o", str(output)]) == 1
    assert "Unsupported output format" in capsys.readouterr().out


def test_export(tmp_path, write_document, object_endpoint_doc, capsys):
    output = tmp_path / "graph.graphml"

    assert main(["export", str(write_document(object_endpoint_doc)), "-o", str(output)]) == 0
    assert output.exists()
    assert "Exported to" in capsys.readouterr().out


def test_parser_options():
    args = build_parser().parse_args(["render", "g.dyn", "-o", "g.svg", "--dpi", "90"])

    assert args.command == "render"
    assert args.output == "g.svg"
    assert args.dpi == 90


def test_program_name_comes_from_settings(monkeypatch):
    assert build_parser().prog == "dynview"

    monkeypatch.setenv("DYNVIEW_APP_NAME", "graphview")
    reload_settings()

    assert build_parser().prog == "graphview"
