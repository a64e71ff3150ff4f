"""
Graph File Loader

Reads a graph document from JSON or YAML:

    {
        "nodes": ["A", "B", "C"],          # optional, fixes node order
        "edges": [["A", "B"], "B C"],      # pairs or "u v" strings
        "directed": false                  # optional
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from graphcanvas.domain.models.graph import GraphModel


logger = logging.getLogger(__name__)


def graph_from_dict(data: Dict[str, Any]) -> Tuple[GraphModel, bool]:
    """Build a GraphModel (and the directed flag) from a parsed document."""
    if not isinstance(data, dict):
        raise ValueError("Graph document must be a mapping with 'nodes'/'edges'")
    unknown = set(data) - {"nodes", "edges", "directed"}
    if unknown:
        raise ValueError(f"Unknown graph document keys: {', '.join(sorted(unknown))}")

    edges = data.get("edges") or []
    for e in edges:
        if isinstance(e, str):
            continue
        if not isinstance(e, (list, tuple)) or len(e) != 2:
            raise ValueError(f"Edge must be 'u v' or a pair, got {e!r}")

    graph = GraphModel.from_edges(data.get("nodes") or [], edges)
    return graph, bool(data.get("directed", False))


def load_graph(path: Union[str, Path]) -> Tuple[GraphModel, bool]:
    """Load a graph from a .json, .yaml or .yml file."""
    path = Path(path)
    with open(path, "r") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    graph, directed = graph_from_dict(data)
    logger.info(
        "Loaded %s: %d nodes, %d edges (%s)",
        path.name, len(graph.nodes), len(graph.edges),
        "directed" if directed else "undirected",
    )
    return graph, directed
