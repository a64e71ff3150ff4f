"""
Analysis Result Models

Label and flag maps produced by the analyzers, bundled into a single
immutable GraphAnalysis value that is rebuilt wholesale on every change.

A field left as ``None`` means the analysis was not computed (its mode is
off); an empty mapping means it was computed for an empty graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional


PALETTE_SIZE = 10

ComponentLabeling = Dict[str, int]
BackedgeFlags = Dict[str, bool]
CutVertexFlags = Dict[str, bool]
BridgeFlags = Dict[str, bool]


class Layer(NamedTuple):
    """Depth of a node in its DFS tree and the deepest level of that tree."""
    depth: int
    tree_max_depth: int


LayerInfo = Dict[str, Layer]


@dataclass(frozen=True)
class GraphAnalysis:
    """Published analysis results for one graph + settings combination."""

    components: Optional[ComponentLabeling] = None
    layers: Optional[LayerInfo] = None
    backedges: Optional[BackedgeFlags] = None
    cut_vertices: Optional[CutVertexFlags] = None
    bridges: Optional[BridgeFlags] = None

    # Holds mutable mappings
    __hash__ = None

    # -- convenience queries --------------------------------------------------

    def palette_index(self, node: str) -> int:
        """Fill colour slot for *node*: its component label modulo the palette."""
        if self.components is None:
            return 0
        return self.components[node] % PALETTE_SIZE

    def is_backedge(self, key: str) -> bool:
        return bool(self.backedges and self.backedges.get(key, False))

    def is_bridge(self, key: str) -> bool:
        return bool(self.bridges and self.bridges.get(key, False))

    def is_cut_vertex(self, node: str) -> bool:
        return bool(self.cut_vertices and self.cut_vertices.get(node, False))

    @property
    def component_count(self) -> int:
        if not self.components:
            return 0
        return len(set(self.components.values()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": self.components,
            "layers": (
                {n: list(layer) for n, layer in self.layers.items()}
                if self.layers is not None else None
            ),
            "backedges": self.backedges,
            "cut_vertices": self.cut_vertices,
            "bridges": self.bridges,
        }
