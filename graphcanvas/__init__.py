"""
graph-canvas

Graph-analysis engine and force-directed layout simulator for interactive
graph visualization.
"""

from graphcanvas.domain.models import GraphModel, GraphAnalysis, Layer, NodeState
from graphcanvas.domain.config import DisplaySettings, PhysicsConfig
from graphcanvas.domain.services import (
    ComponentAnalyzer, SCCAnalyzer, TreeLayerAnalyzer, BridgeAnalyzer, LayoutSimulator,
)
from graphcanvas.application.services import AnalysisService, GraphSession, AnimationLoop

__version__ = "1.0.0"

__all__ = [
    "GraphModel",
    "GraphAnalysis",
    "Layer",
    "NodeState",
    "DisplaySettings",
    "PhysicsConfig",
    "ComponentAnalyzer",
    "SCCAnalyzer",
    "TreeLayerAnalyzer",
    "BridgeAnalyzer",
    "LayoutSimulator",
    "AnalysisService",
    "GraphSession",
    "AnimationLoop",
]
