"""
Snapshot Renderer

Static PNG preview of a layout snapshot, drawn with NetworkX on a
non-interactive Matplotlib canvas using the same pixel coordinates as the
simulator (y grows downward).

Styling follows the published analysis:
    fill colour   component label modulo the 10-colour palette
    hexagon       cut vertex
    dashed edge   back edge (tree mode)
    double line   bridge
    arrow         directed graph
"""

import logging
import math
from pathlib import Path
from typing import List, Tuple, Union

import networkx as nx

try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from graphcanvas.application.services.session import LayoutSnapshot
from graphcanvas.domain.models.graph import split_edge_key


FILL_COLORS_LIGHT = [
    "#dedede", "#dd7878", "#7287ed", "#dfae5d", "#70b05b",
    "#dc8a68", "#309fc5", "#37c2b9", "#ea76cb", "#a879ef",
]

FILL_COLORS_DARK = [
    "#232323", "#7d3838", "#42479d", "#7f5e0d", "#40603b",
    "#8c3a28", "#104f85", "#176249", "#7a366b", "#58398f",
]

STROKE_COLOR_LIGHT = "#1a1a1a"
STROKE_COLOR_DARK = "#e6e6e6"
BACKGROUND_LIGHT = "#ffffff"
BACKGROUND_DARK = "#121212"

DPI = 100
PIXELS_TO_POINTS = 72 / DPI


class SnapshotRenderer:
    """Renders LayoutSnapshot objects to PNG files."""

    def __init__(self, dark_mode: bool = False) -> None:
        self.dark_mode = dark_mode
        self.logger = logging.getLogger(__name__)

    @property
    def fill_colors(self) -> List[str]:
        return FILL_COLORS_DARK if self.dark_mode else FILL_COLORS_LIGHT

    @property
    def stroke_color(self) -> str:
        return STROKE_COLOR_DARK if self.dark_mode else STROKE_COLOR_LIGHT

    def render(self, snapshot: LayoutSnapshot, output_path: Union[str, Path]) -> str:
        if not HAS_MATPLOTLIB:
            raise RuntimeError("matplotlib is required for PNG previews")

        settings = snapshot.settings
        radius = settings.node_radius
        line_width = 2 * settings.node_border_width_half * PIXELS_TO_POINTS

        fig, ax = plt.subplots(figsize=(snapshot.width / DPI, snapshot.height / DPI), dpi=DPI)
        fig.patch.set_facecolor(BACKGROUND_DARK if self.dark_mode else BACKGROUND_LIGHT)
        ax.set_xlim(0, snapshot.width)
        ax.set_ylim(snapshot.height, 0)
        ax.set_aspect("equal")
        ax.axis("off")
        fig.subplots_adjust(left=0, right=1, top=1, bottom=0)

        G = snapshot.graph.to_networkx(directed=snapshot.directed)
        pos = snapshot.positions
        analysis = snapshot.analysis

        # --- Edges ---
        solid: List[Tuple[str, str]] = []
        dashed: List[Tuple[str, str]] = []
        for key in snapshot.graph.edges:
            u, v = split_edge_key(key)
            if analysis.is_bridge(key):
                self._draw_bridge(ax, pos[u], pos[v], radius, line_width)
            elif analysis.is_backedge(key):
                dashed.append((u, v))
            else:
                solid.append((u, v))

        node_size = (2 * radius * PIXELS_TO_POINTS) ** 2
        for edgelist, style in ((solid, "solid"), (dashed, "dashed")):
            if edgelist:
                nx.draw_networkx_edges(
                    G, pos, edgelist=edgelist, ax=ax, style=style,
                    width=line_width, edge_color=self.stroke_color,
                    arrows=snapshot.directed, arrowstyle="-|>",
                    node_size=node_size,
                )

        # --- Nodes ---
        for shape, wanted in (("o", False), ("h", True)):
            nodelist = [u for u in snapshot.graph.nodes if analysis.is_cut_vertex(u) == wanted]
            if not nodelist:
                continue
            nx.draw_networkx_nodes(
                G, pos, nodelist=nodelist, ax=ax, node_shape=shape,
                node_size=node_size, linewidths=line_width,
                node_color=[self.fill_colors[analysis.palette_index(u)] for u in nodelist],
                edgecolors=self.stroke_color,
            )

        if snapshot.graph.nodes:
            nx.draw_networkx_labels(
                G, pos, ax=ax, font_size=radius * PIXELS_TO_POINTS,
                font_weight="bold", font_color=self.stroke_color,
            )

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=DPI, facecolor=fig.get_facecolor())
        plt.close(fig)

        self.logger.info("Rendered snapshot (tick %d) to %s", snapshot.tick, output_path)
        return str(output_path)

    def _draw_bridge(self, ax, p: Tuple[float, float], q: Tuple[float, float],
                     radius: float, line_width: float) -> None:
        """Two parallel lines offset by a quarter of the node radius."""
        px, py = p[1] - q[1], q[0] - p[0]
        norm = math.hypot(px, py)
        if norm == 0:
            return
        px *= radius / 4 / norm
        py *= radius / 4 / norm
        for sign in (1, -1):
            ax.plot(
                [p[0] + sign * px, q[0] + sign * px],
                [p[1] + sign * py, q[1] + sign * py],
                color=self.stroke_color, linewidth=line_width, zorder=1,
            )
