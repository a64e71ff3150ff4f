"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

# Graph snapshot
from .graph import (
    GraphModel, GraphIntegrityError, MissingNodeError, MissingEdgeError,
    edge_key, split_edge_key,
)

# Analysis results
from .analysis import (
    GraphAnalysis, Layer, LayerInfo, ComponentLabeling,
    BackedgeFlags, CutVertexFlags, BridgeFlags, PALETTE_SIZE,
)

# Simulation state
from .layout import NodeState

__all__ = [
    "GraphModel",
    "GraphIntegrityError",
    "MissingNodeError",
    "MissingEdgeError",
    "edge_key",
    "split_edge_key",
    "GraphAnalysis",
    "Layer",
    "LayerInfo",
    "ComponentLabeling",
    "BackedgeFlags",
    "CutVertexFlags",
    "BridgeFlags",
    "PALETTE_SIZE",
    "NodeState",
]
