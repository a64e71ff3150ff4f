"""
Physics Configuration

Tunable constants of the force-directed layout. The values are empirically
tuned for a 60 FPS canvas measured in pixels; only their relative effects
matter (springs push apart below the target distance and pull together above it, the
boundary field is quadratic, the layering pull is a power law).

A YAML file with any subset of the fields can override the defaults:

    node_distance: 120
    friction: 0.08
"""

from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml


@dataclass(frozen=True)
class PhysicsConfig:
    """Force-law constants used by the layout simulator."""

    # Springs
    node_distance: float = 100.0         # target edge length
    spring_exponent: float = 1.3
    spring_divisor: float = 100_000.0

    # Repulsion between non-adjacent nodes: repulsion / dist^5
    repulsion: float = 150_000.0

    # Damping applied after every velocity contribution
    friction: float = 0.05

    # Boundary containment field
    canvas_field_distance: float = 50.0
    boundary_divisor: float = 500_000.0

    # Tree-mode layering
    layer_height_ratio: float = 0.8      # row height as a share of node_distance
    layer_exponent: float = 1.45
    layer_divisor: float = 100.0

    # Node placement / scheduling
    init_attempts: int = 10
    fps: int = 60

    def __post_init__(self) -> None:
        if not 0.0 <= self.friction < 1.0:
            raise ValueError(f"friction must be in [0, 1), got {self.friction}")
        for name in ("node_distance", "spring_divisor", "boundary_divisor", "layer_divisor"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PhysicsConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown physics settings: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_physics_config(path: Union[str, Path]) -> PhysicsConfig:
    """Load physics constants from a YAML file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of physics settings")
    return PhysicsConfig.from_dict(data)
