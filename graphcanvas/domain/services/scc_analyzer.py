"""
SCC Analyzer

Strongly-connected components of a directed graph (Kosaraju).

Pass 1 runs DFS over the forward adjacency from every unvisited node in node
order and records nodes in post-order. Pass 2 walks nodes in reverse finishing
order and flood-fills the reverse adjacency from each unlabeled node; each
fill reaches exactly one strongly-connected component.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Set, Tuple

from graphcanvas.domain.models.graph import GraphModel
from graphcanvas.domain.models.analysis import ComponentLabeling


class SCCAnalyzer:
    """Labels nodes so that equal labels mean mutual reachability."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, graph: GraphModel) -> ComponentLabeling:
        order = self._finishing_order(graph)

        labels: ComponentLabeling = {}
        next_label = 0
        for start in reversed(order):
            if start in labels:
                continue
            labels[start] = next_label
            stack = [start]
            while stack:
                u = stack.pop()
                for v in graph.predecessors(u):
                    if v not in labels:
                        labels[v] = next_label
                        stack.append(v)
            next_label += 1

        self._logger.debug(
            "SCC labeling: %d nodes, %d components", len(labels), next_label,
        )
        return labels

    @staticmethod
    def _finishing_order(graph: GraphModel) -> List[str]:
        """Post-order of an iterative DFS over the forward adjacency."""
        visited: Set[str] = set()
        order: List[str] = []

        for root in graph.nodes:
            if root in visited:
                continue
            visited.add(root)
            # Frames are (node, index of the next successor to try)
            stack: List[Tuple[str, int]] = [(root, 0)]
            succ: Dict[str, List[str]] = {root: graph.successors(root)}
            while stack:
                u, i = stack[-1]
                children = succ[u]
                if i < len(children):
                    stack[-1] = (u, i + 1)
                    v = children[i]
                    if v not in visited:
                        visited.add(v)
                        succ[v] = graph.successors(v)
                        stack.append((v, 0))
                else:
                    stack.pop()
                    order.append(u)
        return order
