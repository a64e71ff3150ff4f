"""
Bridge Analyzer

Bridges and articulation points (cut vertices) of the undirected view of the
graph, using Tarjan's low-link DFS with an explicit stack.

Each node gets a discovery time ``disc`` and a low-link ``low``: the smallest
discovery time reachable from its DFS subtree through tree edges plus at most
one back edge.

    bridge      tree edge (u -> c) with low[c] > disc[u]
    cut vertex  non-root u with a child c where low[c] >= disc[u],
                or a root with more than one DFS child

Only the specific edge used to reach a node is ignored when computing its
low-link, so a parallel copy of the parent link counts as a back edge and
neither copy is reported as a bridge.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from graphcanvas.domain.models.graph import GraphModel
from graphcanvas.domain.models.analysis import BridgeFlags, CutVertexFlags


class BridgeAnalyzer:
    """Low-link DFS for bridges and cut vertices."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, graph: GraphModel) -> Tuple[CutVertexFlags, BridgeFlags]:
        incidences = graph.incidences
        cut: CutVertexFlags = {n: False for n in graph.nodes}
        bridges: BridgeFlags = {key: False for key in graph.edges}
        disc: Dict[str, int] = {}
        low: Dict[str, int] = {}
        timer = 0

        for root in graph.nodes:
            if root in disc:
                continue
            disc[root] = low[root] = timer
            timer += 1
            root_children = 0

            # Frames are (node, edge index used to reach it, incidence iterator)
            stack: List[Tuple[str, Optional[int], Iterator[Tuple[str, int]]]] = [
                (root, None, iter(incidences[root]))
            ]
            while stack:
                u, via, it = stack[-1]
                step = next(it, None)

                if step is None:
                    stack.pop()
                    if not stack:
                        continue
                    parent, parent_via, _ = stack[-1]
                    low[parent] = min(low[parent], low[u])
                    if low[u] > disc[parent]:
                        bridges[graph.edges[via]] = True
                    if parent_via is not None and low[u] >= disc[parent]:
                        cut[parent] = True
                    continue

                v, idx = step
                if idx == via:
                    continue
                if v in disc:
                    low[u] = min(low[u], disc[v])
                else:
                    disc[v] = low[v] = timer
                    timer += 1
                    if u == root:
                        root_children += 1
                    stack.append((v, idx, iter(incidences[v])))

            cut[root] = root_children > 1

        self._logger.debug(
            "Bridge analysis: %d cut vertices, %d bridges",
            sum(cut.values()), sum(bridges.values()),
        )
        return cut, bridges
