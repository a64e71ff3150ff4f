"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for testing graph-canvas.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "bridge"        # Run only bridge tests
    pytest tests/ --quick            # Skip slow tests
"""

import json
import random
import sys
from pathlib import Path
from typing import Dict, Any

import networkx as nx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from graphcanvas.domain.models.graph import GraphModel
from graphcanvas.domain.services.layout_simulator import LayoutSimulator


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def empty_graph() -> GraphModel:
    return GraphModel()


@pytest.fixture
def path_graph() -> GraphModel:
    """A - B - C"""
    return GraphModel.from_edges(["A", "B", "C"], ["A B", "B C"])


@pytest.fixture
def triangle_graph() -> GraphModel:
    """A - B - C - A"""
    return GraphModel.from_edges(["A", "B", "C"], ["A B", "B C", "C A"])


@pytest.fixture
def bowtie_graph() -> GraphModel:
    """Two triangles sharing C: A-B-C and C-D-E."""
    return GraphModel.from_edges(
        ["A", "B", "C", "D", "E"],
        ["A B", "B C", "C A", "C D", "D E", "E C"],
    )


@pytest.fixture
def cycle_with_tail() -> GraphModel:
    """Directed: A -> B -> A, B -> C"""
    return GraphModel.from_edges(["A", "B", "C"], ["A B", "B A", "B C"])


def model_from_networkx(G: nx.Graph) -> GraphModel:
    """GraphModel with string node ids mirroring a NetworkX graph."""
    return GraphModel.from_edges(
        [str(n) for n in G.nodes],
        [(str(u), str(v)) for u, v in G.edges],
    )


@pytest.fixture
def random_graphs():
    """Seeded sparse random graphs (undirected), as (nx graph, model) pairs."""
    graphs = []
    for seed in range(12):
        rng = random.Random(seed)
        n = rng.randint(1, 25)
        m = rng.randint(0, min(n * (n - 1) // 2, int(n * 1.3)))
        G = nx.gnm_random_graph(n, m, seed=seed)
        G = nx.relabel_nodes(G, str)
        graphs.append((G, model_from_networkx(G)))
    return graphs


@pytest.fixture
def random_digraphs():
    """Seeded sparse random directed graphs, as (nx digraph, model) pairs."""
    graphs = []
    for seed in range(12):
        rng = random.Random(100 + seed)
        n = rng.randint(1, 25)
        m = rng.randint(0, min(n * (n - 1), n * 2))
        G = nx.gnm_random_graph(n, m, seed=seed, directed=True)
        G = nx.relabel_nodes(G, str)
        graphs.append((G, model_from_networkx(G)))
    return graphs


# =============================================================================
# Simulator Fixtures
# =============================================================================

@pytest.fixture
def simulator() -> LayoutSimulator:
    """800x600 simulator with seeded placement."""
    return LayoutSimulator(width=800, height=600, rng=random.Random(42))


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def graph_document() -> Dict[str, Any]:
    return {
        "nodes": ["A", "B", "C", "D"],
        "edges": [["A", "B"], "B C", ["C", "A"], "C D"],
        "directed": False,
    }


@pytest.fixture
def graph_file(graph_document, tmp_path) -> Path:
    """Graph document saved to a temp JSON file"""
    filepath = tmp_path / "graph.json"
    with open(filepath, "w") as f:
        json.dump(graph_document, f)
    return filepath
