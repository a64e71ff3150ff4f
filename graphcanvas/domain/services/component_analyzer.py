"""
Component Analyzer

Labels the connected components of the graph, treating every edge as
undirected. Labels are contiguous from 0 and follow node order: the first
node of the node sequence is always in component 0.
"""

from __future__ import annotations

import logging
from collections import deque

from graphcanvas.domain.models.graph import GraphModel
from graphcanvas.domain.models.analysis import ComponentLabeling


class ComponentAnalyzer:
    """Undirected connected components by breadth-first flood fill."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, graph: GraphModel) -> ComponentLabeling:
        labels: ComponentLabeling = {}
        next_label = 0

        for start in graph.nodes:
            if start in labels:
                continue
            labels[start] = next_label
            queue = deque([start])
            while queue:
                u = queue.popleft()
                for v in graph.neighbors(u):
                    if v not in labels:
                        labels[v] = next_label
                        queue.append(v)
            next_label += 1

        self._logger.debug(
            "Component labeling: %d nodes, %d components", len(labels), next_label,
        )
        return labels
