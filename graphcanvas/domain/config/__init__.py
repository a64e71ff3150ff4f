"""
Domain Configuration Package

Display settings and physics constants for analysis and layout.
"""

from .display import DisplaySettings, DEFAULT_NODE_RADIUS, DEFAULT_NODE_BORDER_WIDTH_HALF
from .physics import PhysicsConfig, load_physics_config

__all__ = [
    "DisplaySettings",
    "DEFAULT_NODE_RADIUS",
    "DEFAULT_NODE_BORDER_WIDTH_HALF",
    "PhysicsConfig",
    "load_physics_config",
]
