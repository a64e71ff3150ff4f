"""Smoke tests for bin/layout_graph.py."""

import importlib.util
import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest


SCRIPT = Path(__file__).resolve().parent.parent / "bin" / "layout_graph.py"


@pytest.fixture(scope="module")
def layout_graph():
    spec = importlib.util.spec_from_file_location("layout_graph", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run_cli(module, *argv):
    with patch.object(sys, "argv", ["layout_graph.py", *argv]):
        return module.main()


def test_export_snapshot(layout_graph, graph_file, tmp_path):
    out = tmp_path / "out" / "layout.json"
    code = run_cli(
        layout_graph, str(graph_file),
        "--bridges", "--components", "--ticks", "20", "--seed", "1",
        "-o", str(out), "-q",
    )
    assert code == 0

    data = json.loads(out.read_text())
    assert data["tick"] == 20
    bridges = {e["key"]: e["bridge"] for e in data["edges"]}
    assert bridges == {"A B": False, "B C": False, "C A": False, "C D": True}
    cut = [n["id"] for n in data["nodes"] if n["cut_vertex"]]
    assert cut == ["C"]


def test_json_to_stdout(layout_graph, graph_file, capsys):
    code = run_cli(layout_graph, str(graph_file), "--directed", "--components",
                   "--ticks", "3", "--json")
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["directed"] is True
    assert data["analysis"]["bridges"] is None


def test_summary_output(layout_graph, graph_file, capsys):
    code = run_cli(layout_graph, str(graph_file), "--tree", "--ticks", "5")
    assert code == 0
    out = capsys.readouterr().out
    assert "4 nodes, 4 edges" in out
    assert "Back edges" in out


def test_missing_file_fails(layout_graph, tmp_path, capsys):
    code = run_cli(layout_graph, str(tmp_path / "missing.json"), "-q")
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_bad_physics_file_fails(layout_graph, graph_file, tmp_path):
    physics = tmp_path / "physics.yaml"
    physics.write_text("gravity: 9.81\n")
    code = run_cli(layout_graph, str(graph_file), "--physics", str(physics), "-q")
    assert code == 1


def test_canvas_and_seed_reach_layout(layout_graph, graph_file, tmp_path):
    outputs = []
    for name in ("a.json", "b.json"):
        out = tmp_path / name
        code = run_cli(layout_graph, str(graph_file), "--width", "500", "--height", "400",
                       "--seed", "5", "--ticks", "10", "-o", str(out), "-q")
        assert code == 0
        outputs.append(json.loads(out.read_text()))

    assert outputs[0]["canvas"] == {"width": 500.0, "height": 400.0}
    assert outputs[0]["nodes"] == outputs[1]["nodes"]
    for node in outputs[0]["nodes"]:
        assert 16 <= node["x"] <= 500 - 16
        assert 16 <= node["y"] <= 400 - 16
