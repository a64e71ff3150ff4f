"""
Tests for the application layer.

Covers:
    - GraphSession: rebuild on change, layer gating, snapshots
    - Container / Settings: environment overrides and wiring
    - Graph loader and JSON exporter
    - Snapshot renderer (skipped without matplotlib)
"""

import json
import random

import pytest

from graphcanvas.adapters.inbound.graph_loader import graph_from_dict, load_graph
from graphcanvas.adapters.outbound.json_exporter import JsonSnapshotExporter
from graphcanvas.application.container import Container, Settings
from graphcanvas.application.services.analysis_service import AnalysisService
from graphcanvas.application.services.session import GraphSession
from graphcanvas.domain.config.display import DisplaySettings
from graphcanvas.domain.models.analysis import Layer
from graphcanvas.domain.models.graph import GraphIntegrityError, GraphModel
from graphcanvas.domain.services.layout_simulator import LayoutSimulator


@pytest.fixture
def session():
    sim = LayoutSimulator(800, 600, rng=random.Random(7))
    return GraphSession(simulator=sim)


# =============================================================================
# GraphSession Tests
# =============================================================================

class TestGraphSession:
    """Tests for the engine context."""

    def test_initial_state(self, session):
        snap = session.snapshot()
        assert snap.tick == 0
        assert snap.positions == {}
        assert snap.analysis.components is None

    def test_settings_change_rebuilds_analysis(self, session, path_graph):
        session.update_graph(path_graph)
        assert session.analysis.bridges is None

        session.update_settings(DisplaySettings(show_bridges=True))
        assert session.analysis.bridges == {"A B": True, "B C": True}

    def test_graph_change_rebuilds_analysis(self, session, path_graph, triangle_graph):
        session.update_settings(DisplaySettings(show_bridges=True))
        session.update_graph(path_graph)
        assert session.analysis.is_bridge("A B")

        session.update_graph(triangle_graph)
        assert not session.analysis.is_bridge("A B")

    def test_directed_switches_to_scc(self, session, cycle_with_tail):
        session.update_settings(DisplaySettings(show_components=True, show_bridges=True))
        session.update_graph(cycle_with_tail)
        assert session.analysis.component_count == 1

        session.update_directed(True)
        assert session.analysis.component_count == 2
        assert session.analysis.bridges is None

    def test_layers_only_in_undirected_tree_mode(self, session, path_graph):
        session.update_graph(path_graph)
        assert session.active_layers is None

        session.update_settings(DisplaySettings(tree_mode=True))
        assert session.active_layers["C"] == Layer(3, 3)

        session.update_directed(True)
        assert session.active_layers is None

    def test_positions_survive_rebuild(self, session, path_graph):
        session.update_graph(path_graph)
        before = session.snapshot().positions["A"]
        session.update_settings(DisplaySettings(show_components=True))
        assert session.snapshot().positions["A"] == before

    def test_tick_advances(self, session, path_graph):
        session.update_graph(path_graph)
        session.tick()
        session.tick()
        assert session.snapshot().tick == 2

    def test_lock_mode_holds_positions(self, session, path_graph):
        session.update_graph(path_graph)
        session.update_settings(DisplaySettings(lock_mode=True))
        before = session.snapshot().positions
        session.tick()
        assert session.snapshot().positions == before

    def test_hover_and_drag(self, session, path_graph):
        session.update_graph(path_graph)
        session.simulator.place("A", 200.0, 200.0)
        session.simulator.place("B", 600.0, 100.0)
        session.simulator.place("C", 600.0, 500.0)
        assert session.hovering(205.0, 200.0)
        assert session.pointer_down(200.0, 200.0) == ["A"]
        session.pointer_move(300.0, 310.0)
        session.tick()
        assert session.snapshot().positions["A"] == (300.0, 310.0)
        session.pointer_up()
        assert session.simulator.dragged == ()

    def test_invalid_settings_rejected(self, session):
        with pytest.raises(ValueError):
            session.update_settings(DisplaySettings(node_radius=-1))

    def test_keeps_injected_collaborators(self):
        # Nothing synced yet, so the simulator is empty
        sim = LayoutSimulator(320, 240, rng=random.Random(3))
        service = AnalysisService()
        session = GraphSession(simulator=sim, analysis_service=service)
        assert len(sim) == 0
        assert session.simulator is sim
        assert session.analysis_service is service

    def test_snapshot_is_unhashable(self, session, path_graph):
        session.update_graph(path_graph)
        with pytest.raises(TypeError):
            hash(session.snapshot())

    def test_snapshot_to_dict(self, session, path_graph):
        session.update_settings(DisplaySettings(show_components=True, show_bridges=True))
        session.update_graph(path_graph)
        data = session.snapshot().to_dict()

        assert [n["id"] for n in data["nodes"]] == ["A", "B", "C"]
        assert data["nodes"][1]["cut_vertex"] is True
        assert data["edges"][0] == {"key": "A B", "backedge": False, "bridge": True}
        assert data["canvas"] == {"width": 800.0, "height": 600.0}
        json.dumps(data)


# =============================================================================
# Container Tests
# =============================================================================

class TestContainer:
    """Tests for settings and dependency wiring."""

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("GRAPHCANVAS_WIDTH", "1024")
        monkeypatch.setenv("GRAPHCANVAS_HEIGHT", "768")
        monkeypatch.setenv("GRAPHCANVAS_FPS", "30")
        monkeypatch.setenv("GRAPHCANVAS_SEED", "3")
        monkeypatch.delenv("GRAPHCANVAS_PHYSICS", raising=False)

        s = Settings.from_env()
        assert (s.width, s.height, s.fps, s.seed) == (1024.0, 768.0, 30, 3)
        assert s.physics().fps == 30

    def test_settings_defaults(self, monkeypatch):
        for name in ("WIDTH", "HEIGHT", "FPS", "SEED", "PHYSICS"):
            monkeypatch.delenv(f"GRAPHCANVAS_{name}", raising=False)
        s = Settings.from_env()
        assert (s.width, s.height) == (800.0, 600.0)
        assert s.fps is None and s.seed is None

    def test_physics_file(self, tmp_path):
        path = tmp_path / "physics.yml"
        path.write_text("node_distance: 140\n")
        container = Container.from_settings(Settings(physics_path=str(path)))
        assert container.physics().node_distance == 140
        assert container.layout_simulator().physics.node_distance == 140

    def test_session_uses_configured_simulator(self, tmp_path, monkeypatch):
        path = tmp_path / "physics.yaml"
        path.write_text("node_distance: 140\n")
        container = Container.from_settings(
            Settings(width=1000, height=700, seed=11, physics_path=str(path)),
        )
        built = container.layout_simulator()
        monkeypatch.setattr(container, "layout_simulator", lambda: built)

        sim = container.session().simulator
        assert sim is built
        assert sim.physics.node_distance == 140
        assert (sim.width, sim.height) == (1000.0, 700.0)

    def test_session_is_singleton(self):
        container = Container()
        assert container.session() is container.session()

    def test_seeded_placement_is_reproducible(self, path_graph):
        positions = []
        for _ in range(2):
            session = Container.from_settings(Settings(seed=11)).session()
            session.update_graph(path_graph)
            positions.append(session.snapshot().positions)
        assert positions[0] == positions[1]

    def test_animation_loop_ticks_session(self, path_graph):
        container = Container.from_settings(Settings(fps=1000))
        container.session().update_graph(path_graph)
        seen = []
        loop = container.animation_loop(seen.append)
        assert loop.run(max_frames=3) == 3
        assert seen == [0, 1, 2]
        assert container.session().snapshot().tick == 3


# =============================================================================
# Adapter Tests
# =============================================================================

class TestGraphLoader:
    """Tests for reading graph documents."""

    def test_load_json(self, graph_file):
        graph, directed = load_graph(graph_file)
        assert graph.nodes == ("A", "B", "C", "D")
        assert graph.edges == ("A B", "B C", "C A", "C D")
        assert directed is False

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text("edges:\n  - [X, Y]\n  - Y Z\ndirected: true\n")
        graph, directed = load_graph(path)
        assert graph.nodes == ("X", "Y", "Z")
        assert directed is True

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError):
            graph_from_dict({"vertices": ["A"]})

    def test_bad_edge_rejected(self):
        with pytest.raises(ValueError):
            graph_from_dict({"edges": [["A", "B", "C"]]})

    @pytest.mark.parametrize("edge", [5, None, {"u": "A", "v": "B"}])
    def test_non_sequence_edge_rejected(self, edge):
        with pytest.raises(ValueError):
            graph_from_dict({"edges": [edge]})

    def test_duplicate_nodes_rejected(self):
        with pytest.raises(GraphIntegrityError):
            graph_from_dict({"nodes": ["A", "A"]})

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_graph(tmp_path / "nope.json")


class TestExporters:
    """Tests for JSON export and PNG rendering."""

    def test_export_json_creates_dirs(self, session, path_graph, tmp_path):
        session.update_graph(path_graph)
        out = tmp_path / "nested" / "layout.json"
        JsonSnapshotExporter().export_json(session.snapshot(), out)

        data = json.loads(out.read_text())
        assert len(data["nodes"]) == 3
        assert data["analysis"]["components"] is None

    def test_render_png(self, session, bowtie_graph, tmp_path):
        pytest.importorskip("matplotlib")
        from graphcanvas.adapters.outbound.snapshot_renderer import SnapshotRenderer

        session.update_settings(DisplaySettings(show_components=True, show_bridges=True))
        session.update_graph(GraphModel.from_edges(
            list(bowtie_graph.nodes) + ["F"], list(bowtie_graph.edges) + ["E F"],
        ))
        for _ in range(5):
            session.tick()

        out = tmp_path / "layout.png"
        SnapshotRenderer(dark_mode=True).render(session.snapshot(), out)
        assert out.exists() and out.stat().st_size > 0
