"""
Domain Services Package

Pure domain logic: graph analyzers and the force-directed layout simulator.
"""

from .component_analyzer import ComponentAnalyzer
from .scc_analyzer import SCCAnalyzer
from .tree_layer_analyzer import TreeLayerAnalyzer, ROOT_DEPTH
from .bridge_analyzer import BridgeAnalyzer
from .layout_simulator import LayoutSimulator, clamp

__all__ = [
    # Analyzers
    "ComponentAnalyzer",
    "SCCAnalyzer",
    "TreeLayerAnalyzer",
    "ROOT_DEPTH",
    "BridgeAnalyzer",
    # Layout
    "LayoutSimulator",
    "clamp",
]
