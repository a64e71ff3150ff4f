"""
Graph Session

Engine context tying one graph, its mode flags and its layout together.
This is the entry point collaborators talk to: the input side pushes graphs,
settings, canvas sizes and pointer events; the rendering side reads
snapshots between ticks.

Every graph, directed-flag or settings change recomputes the analysis from
scratch and swaps the new GraphAnalysis in as a whole. Node states survive
those rebuilds for nodes that are still present.

Usage:
    session = GraphSession(width=800, height=600)
    session.update_graph(GraphModel.from_edges(edges=["A B", "B C"]))
    session.update_settings(DisplaySettings(show_bridges=True))
    session.tick()
    snap = session.snapshot()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from graphcanvas.domain.config.display import DisplaySettings
from graphcanvas.domain.models.analysis import GraphAnalysis
from graphcanvas.domain.models.graph import GraphModel
from graphcanvas.domain.services.layout_simulator import LayoutSimulator
from graphcanvas.application.services.analysis_service import AnalysisService


@dataclass(frozen=True)
class LayoutSnapshot:
    """Everything a renderer needs to draw one frame."""
    tick: int
    width: float
    height: float
    directed: bool
    settings: DisplaySettings
    graph: GraphModel
    positions: Dict[str, Tuple[float, float]]
    analysis: GraphAnalysis

    # Holds mutable mappings
    __hash__ = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "canvas": {"width": self.width, "height": self.height},
            "directed": self.directed,
            "settings": self.settings.to_dict(),
            "nodes": [
                {
                    "id": u,
                    "x": self.positions[u][0],
                    "y": self.positions[u][1],
                    "palette_index": self.analysis.palette_index(u),
                    "cut_vertex": self.analysis.is_cut_vertex(u),
                }
                for u in self.graph.nodes
            ],
            "edges": [
                {
                    "key": key,
                    "backedge": self.analysis.is_backedge(key),
                    "bridge": self.analysis.is_bridge(key),
                }
                for key in self.graph.edges
            ],
            "analysis": self.analysis.to_dict(),
        }


class GraphSession:
    """Owns the current graph, settings, analysis and layout simulator."""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        simulator: Optional[LayoutSimulator] = None,
        analysis_service: Optional[AnalysisService] = None,
        settings: Optional[DisplaySettings] = None,
    ) -> None:
        self.settings = (settings if settings is not None else DisplaySettings()).validate()
        # An unsynced simulator has no nodes and is falsy
        if simulator is None:
            simulator = LayoutSimulator(width, height, node_radius=self.settings.node_radius)
        self.simulator = simulator
        self.simulator.set_node_radius(self.settings.node_radius)
        self.analysis_service = (
            analysis_service if analysis_service is not None else AnalysisService()
        )
        self.graph = GraphModel()
        self.directed = False
        self.analysis = GraphAnalysis()
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def update_graph(self, graph: GraphModel) -> None:
        self.graph = graph
        self.simulator.sync(graph)
        self._rebuild()

    def update_directed(self, directed: bool) -> None:
        if directed == self.directed:
            return
        self.directed = directed
        self._rebuild()

    def update_settings(self, settings: DisplaySettings) -> None:
        self.settings = settings.validate()
        self.simulator.set_node_radius(settings.node_radius)
        self._rebuild()

    def resize(self, width: float, height: float) -> None:
        self.simulator.resize(width, height)

    def pointer_down(self, x: float, y: float) -> List[str]:
        return self.simulator.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.simulator.pointer_move(x, y)

    def pointer_up(self) -> None:
        self.simulator.pointer_up()

    def pointer_leave(self) -> None:
        self.simulator.pointer_leave()

    def hovering(self, x: float, y: float) -> bool:
        """Whether the pointer is over a node (pointer cursor feedback)."""
        return bool(self.simulator.nodes_at(x, y))

    def _rebuild(self) -> None:
        self.analysis = self.analysis_service.build(self.graph, self.directed, self.settings)

    # ------------------------------------------------------------------
    # Tick / outputs
    # ------------------------------------------------------------------

    @property
    def active_layers(self):
        """Layer map the layout should follow, or None outside tree mode."""
        if self.directed or not self.settings.tree_mode:
            return None
        return self.analysis.layers

    def tick(self, dt: float = 1.0) -> None:
        self.simulator.step(
            dt,
            layers=self.active_layers,
            locked=self.settings.lock_mode,
        )

    def snapshot(self) -> LayoutSnapshot:
        return LayoutSnapshot(
            tick=self.simulator.tick_count,
            width=self.simulator.width,
            height=self.simulator.height,
            directed=self.directed,
            settings=self.settings,
            graph=self.graph,
            positions=self.simulator.positions(),
            analysis=self.analysis,
        )
