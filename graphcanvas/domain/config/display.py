"""
Display Settings

Mode flags and node geometry chosen by the user. The flags gate which
analyses are computed; the geometry feeds hit-testing and in-bounds checks
of the layout simulator.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict


DEFAULT_NODE_RADIUS = 16
DEFAULT_NODE_BORDER_WIDTH_HALF = 1.0


@dataclass(frozen=True)
class DisplaySettings:
    """User-facing settings that trigger recomputation when changed."""
    show_components: bool = False
    show_bridges: bool = False
    tree_mode: bool = False
    lock_mode: bool = False
    node_radius: float = DEFAULT_NODE_RADIUS
    node_border_width_half: float = DEFAULT_NODE_BORDER_WIDTH_HALF

    def validate(self) -> "DisplaySettings":
        if self.node_radius <= 0:
            raise ValueError(f"node_radius must be positive, got {self.node_radius}")
        if not 0 <= self.node_border_width_half < self.node_radius:
            raise ValueError(
                "node_border_width_half must be non-negative and smaller than node_radius"
            )
        return self

    def with_changes(self, **changes: Any) -> "DisplaySettings":
        return replace(self, **changes).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
