"""
Application Services Package

Orchestrates the domain analyzers and the layout simulator.
"""

from .analysis_service import AnalysisService
from .session import GraphSession, LayoutSnapshot
from .animation_loop import AnimationLoop

__all__ = [
    "AnalysisService",
    "GraphSession",
    "LayoutSnapshot",
    "AnimationLoop",
]
