"""
Tree Layer Analyzer

Builds a DFS spanning forest over the undirected view of the graph and
reports, for each node, its depth in its tree and the maximum depth of that
tree. Edges that are not part of the forest are flagged as back edges.

Roots have depth 1, so a tree of depth d occupies rows 1..d. The layout uses
the tree's maximum depth to shrink row height when a deep tree would
overflow the canvas.

Back edge flags are keyed by the edge's own key ("u v" as entered). Parallel
edges are distinguished by their position in the edge list: the second edge
between a parent and its child is a back edge. A key that occurs more than
once is classified on its first traversal only.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from graphcanvas.domain.models.graph import GraphModel
from graphcanvas.domain.models.analysis import BackedgeFlags, Layer, LayerInfo


ROOT_DEPTH = 1


class TreeLayerAnalyzer:
    """DFS spanning-forest depth layering with back-edge detection."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, graph: GraphModel) -> Tuple[LayerInfo, BackedgeFlags]:
        incidences = graph.incidences
        depth: Dict[str, int] = {}
        backedges: BackedgeFlags = {}
        layers: LayerInfo = {}
        tree_count = 0

        for root in graph.nodes:
            if root in depth:
                continue
            tree_count += 1
            depth[root] = ROOT_DEPTH
            tree_nodes: List[str] = [root]

            # Frames are (node, edge index used to reach it, incidence iterator)
            stack: List[Tuple[str, Optional[int], Iterator[Tuple[str, int]]]] = [
                (root, None, iter(incidences[root]))
            ]
            while stack:
                u, via, it = stack[-1]
                step = next(it, None)
                if step is None:
                    stack.pop()
                    continue
                v, idx = step
                if idx == via:
                    continue
                key = graph.edges[idx]
                if key in backedges:
                    continue
                if v in depth:
                    backedges[key] = True
                else:
                    backedges[key] = False
                    depth[v] = depth[u] + 1
                    tree_nodes.append(v)
                    stack.append((v, idx, iter(incidences[v])))

            max_depth = max(depth[n] for n in tree_nodes)
            for n in tree_nodes:
                layers[n] = Layer(depth[n], max_depth)

        self._logger.debug(
            "Tree layering: %d trees, %d back edges",
            tree_count, sum(backedges.values()),
        )
        return layers, backedges

    @staticmethod
    def count_trees(layers: LayerInfo) -> int:
        """Number of trees in the forest: one root (depth 1) per tree."""
        return sum(1 for layer in layers.values() if layer.depth == ROOT_DEPTH)
