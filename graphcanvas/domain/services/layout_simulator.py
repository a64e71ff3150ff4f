"""
Layout Simulator

Force-directed layout that relaxes node positions one tick at a time. The
simulation never converges on purpose: it runs for as long as frames are
scheduled, so dragged or newly added nodes are always pulled back into a
readable arrangement.

Per tick (symplectic Euler, forces evaluated at the positions the tick
started with):
    1. Pair forces   non-adjacent pairs repel with repulsion / dist^5,
                     adjacent pairs act as springs around node_distance
    2. Containment   quadratic pull toward the canvas centre near the edges
    3. Layering      (tree mode) power-law pull toward the node's tree row
    4. Integration   position += velocity
    5. Drag          dragged nodes follow the pointer
    6. Correction    nodes outside the canvas are snapped back inside

Lock mode suspends steps 1-4; dragging and boundary correction stay active.

Usage:
    sim = LayoutSimulator(width=800, height=600)
    sim.sync(graph)
    sim.step()
    sim.positions()
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import numpy as np

from graphcanvas.domain.config.display import DEFAULT_NODE_RADIUS
from graphcanvas.domain.config.physics import PhysicsConfig
from graphcanvas.domain.models.analysis import LayerInfo
from graphcanvas.domain.models.graph import GraphModel, MissingNodeError
from graphcanvas.domain.models.layout import NodeState


# Pair distances are floored here so coincident nodes get a finite force
MIN_DISTANCE = 1.0


def clamp(val: float, low: float, high: float) -> float:
    return max(low, min(val, high))


class LayoutSimulator:
    """Owns per-node position/velocity and advances the physics."""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        physics: Optional[PhysicsConfig] = None,
        node_radius: float = DEFAULT_NODE_RADIUS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.width = float(width)
        self.height = float(height)
        self.physics = physics or PhysicsConfig()
        self.node_radius = float(node_radius)
        self.tick_count = 0

        self._rng = rng or random.Random()
        self._nodes: List[str] = []
        self._states: Dict[str, NodeState] = {}
        self._edge_mask = np.zeros((0, 0), dtype=bool)
        self._pointer: Tuple[float, float] = (0.0, 0.0)
        self._dragged: List[str] = []
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Graph / canvas updates
    # ------------------------------------------------------------------

    def sync(self, graph: GraphModel) -> None:
        """
        Match node states to *graph*.

        New nodes are placed at random inside the canvas, nodes that left the
        graph are dropped, surviving nodes keep their position and velocity.
        """
        added = 0
        for u in graph.nodes:
            if u not in self._states:
                self._states[u] = self._spawn()
                added += 1

        removed = [u for u in self._states if u not in graph]
        for u in removed:
            del self._states[u]

        self._nodes = list(graph.nodes)
        self._dragged = [u for u in self._dragged if u in graph]

        n = len(self._nodes)
        mask = np.zeros((n, n), dtype=bool)
        for u, v in graph.edge_pairs:
            i, j = graph.index_of(u), graph.index_of(v)
            if i != j:
                mask[i, j] = mask[j, i] = True
        self._edge_mask = mask

        self.logger.debug(
            "Synced layout: %d nodes (+%d, -%d)", n, added, len(removed),
        )

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def set_node_radius(self, radius: float) -> None:
        self.node_radius = float(radius)

    def place(self, node: str, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> None:
        """Put *node* at an explicit position and velocity."""
        self._require(node)
        self._states[node] = NodeState(x, y, vx, vy)

    def _spawn(self) -> NodeState:
        """Random in-bounds position, retrying each axis a bounded number of times."""
        r = self.node_radius
        x = self._rng.random() * self.width
        y = self._rng.random() * self.height

        attempts = 0
        while x <= r or x >= self.width - r:
            x = round(self._rng.random() * self.width)
            attempts += 1
            if attempts == self.physics.init_attempts:
                break
        attempts = 0
        while y <= r or y >= self.height - r:
            y = round(self._rng.random() * self.height)
            attempts += 1
            if attempts == self.physics.init_attempts:
                break

        return NodeState(float(x), float(y))

    # ------------------------------------------------------------------
    # Pointer / drag override
    # ------------------------------------------------------------------

    def nodes_at(self, x: float, y: float) -> List[str]:
        """Nodes whose centre lies within node_radius of (x, y)."""
        return [
            u for u in self._nodes
            if math.hypot(self._states[u].x - x, self._states[u].y - y) <= self.node_radius
        ]

    def pointer_down(self, x: float, y: float) -> List[str]:
        """Start dragging every node under the pointer."""
        self._pointer = (float(x), float(y))
        picked = self.nodes_at(x, y)
        for u in picked:
            if u not in self._dragged:
                self._dragged.append(u)
        return picked

    def pointer_move(self, x: float, y: float) -> None:
        self._pointer = (float(x), float(y))

    def pointer_up(self) -> None:
        self._dragged = []

    def pointer_leave(self) -> None:
        self._dragged = []

    @property
    def dragged(self) -> Tuple[str, ...]:
        return tuple(self._dragged)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def step(
        self,
        dt: float = 1.0,
        layers: Optional[LayerInfo] = None,
        locked: bool = False,
    ) -> None:
        """
        Advance the simulation by one tick.

        Args:
            dt: Tick length in frames (1.0 at the nominal frame rate)
            layers: Tree layering to pull nodes toward, or None
            locked: Suspend forces and integration, keep drag and correction
        """
        if not self._nodes:
            return
        if not locked:
            self._relax(dt, layers)
        self._apply_drag()
        self._reset_misplaced()
        self.tick_count += 1

    def _relax(self, dt: float, layers: Optional[LayerInfo]) -> None:
        phys = self.physics
        keep = 1.0 - phys.friction
        n = len(self._nodes)

        pos = np.array([[self._states[u].x, self._states[u].y] for u in self._nodes], dtype=float)
        vel = np.array([[self._states[u].vx, self._states[u].vy] for u in self._nodes], dtype=float)

        # 1. pair forces
        if n > 1:
            diff = pos[None, :, :] - pos[:, None, :]          # diff[i, j] = pos[j] - pos[i]
            dist = np.hypot(diff[..., 0], diff[..., 1])
            safe = np.maximum(dist, MIN_DISTANCE)

            repel = phys.repulsion / safe ** 5
            spring = np.abs(dist - phys.node_distance) ** phys.spring_exponent / phys.spring_divisor
            spring = np.where(dist >= phys.node_distance, -spring, spring)

            mag = np.where(self._edge_mask, spring, repel)
            np.fill_diagonal(mag, 0.0)
            accel = -mag[..., None] * diff * dt

            # Each contribution is damped once for every contribution after it,
            # taken in node order with the node itself skipped.
            idx = np.arange(n)
            rank = np.where(idx[None, :] < idx[:, None], idx[None, :] + 1, idx[None, :])
            weights = keep ** (n - rank).astype(float)
            np.fill_diagonal(weights, 0.0)

            vel = vel * keep ** (n - 1) + np.einsum("ij,ijk->ik", weights, accel)

        # 2. boundary containment
        size = np.array([self.width, self.height])
        centre = size / 2.0
        to_centre = centre[None, :] - pos
        near_edge = np.minimum(pos, size[None, :] - pos) <= phys.canvas_field_distance
        sign = np.where(to_centre >= 0, 1.0, -1.0)
        boundary = np.where(near_edge, to_centre ** 2 * sign / phys.boundary_divisor, 0.0)
        vel = (vel + boundary * dt) * keep

        # 3. tree layering
        if layers is not None:
            y_target = self._layer_targets(layers)
            gap = pos[:, 1] - y_target
            pull = np.abs(gap) ** phys.layer_exponent / phys.layer_divisor
            pull = np.where(gap > 0, -pull, pull)
            vel[:, 1] = (vel[:, 1] + pull * dt) * keep

        # 4. integrate
        pos = pos + vel * dt

        for i, u in enumerate(self._nodes):
            self._states[u] = NodeState(
                float(pos[i, 0]), float(pos[i, 1]), float(vel[i, 0]), float(vel[i, 1]),
            )

    def _layer_targets(self, layers: LayerInfo) -> np.ndarray:
        """Target y coordinate of each node's tree row."""
        phys = self.physics
        try:
            depth = np.array([layers[u].depth for u in self._nodes], dtype=float)
            max_depth = np.array([layers[u].tree_max_depth for u in self._nodes], dtype=float)
        except KeyError as exc:
            raise MissingNodeError(exc.args[0]) from None

        usable = max(self.height - 2 * phys.canvas_field_distance, 0.0)
        row = phys.node_distance * phys.layer_height_ratio
        rows = np.where(max_depth * row >= usable, usable / max_depth, row)
        return phys.canvas_field_distance + (depth - 0.5) * rows

    def _apply_drag(self) -> None:
        r = self.node_radius
        x = clamp(self._pointer[0], r, self.width - r)
        y = clamp(self._pointer[1], r, self.height - r)
        for u in self._dragged:
            state = self._states[u]
            state.x, state.y = x, y

    def _in_bounds(self, state: NodeState) -> bool:
        r = self.node_radius
        x_ok = state.x >= r and state.x + r <= self.width
        y_ok = state.y >= r and state.y + r <= self.height
        return x_ok and y_ok

    def _reset_misplaced(self) -> None:
        r = self.node_radius
        for u in self._nodes:
            state = self._states[u]
            if not self._in_bounds(state):
                state.x = clamp(state.x, r, self.width - r)
                state.y = clamp(state.y, r, self.height - r)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def _require(self, node: str) -> NodeState:
        try:
            return self._states[node]
        except KeyError:
            raise MissingNodeError(node) from None

    def state(self, node: str) -> NodeState:
        """Copy of the state of *node*; mutate through the simulator only."""
        return replace(self._require(node))

    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {u: self._states[u].pos for u in self._nodes}

    @property
    def nodes(self) -> Tuple[str, ...]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
