"""
Layout Models

Per-node simulation state owned by the layout simulator.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass
class NodeState:
    """Position and velocity of one node, in canvas pixels (per frame)."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "vx": self.vx, "vy": self.vy}
