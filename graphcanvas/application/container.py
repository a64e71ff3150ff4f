"""
Application Container

Dependency injection container that wires the analysis service, layout
simulator, session and animation loop. Includes settings configuration.
"""

import os
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from graphcanvas.domain.config.display import DisplaySettings
from graphcanvas.domain.config.physics import PhysicsConfig, load_physics_config


# =============================================================================
# Settings
# =============================================================================

@dataclass
class Settings:
    """Application settings from environment."""

    width: float = 800.0
    height: float = 600.0
    fps: Optional[int] = None
    seed: Optional[int] = None
    physics_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        seed = os.getenv("GRAPHCANVAS_SEED")
        fps = os.getenv("GRAPHCANVAS_FPS")
        return cls(
            width=float(os.getenv("GRAPHCANVAS_WIDTH", "800")),
            height=float(os.getenv("GRAPHCANVAS_HEIGHT", "600")),
            fps=int(fps) if fps else None,
            seed=int(seed) if seed else None,
            physics_path=os.getenv("GRAPHCANVAS_PHYSICS") or None,
        )

    def physics(self) -> PhysicsConfig:
        config = load_physics_config(self.physics_path) if self.physics_path else PhysicsConfig()
        if self.fps is not None and self.fps != config.fps:
            config = PhysicsConfig.from_dict({**config.to_dict(), "fps": self.fps})
        return config


# =============================================================================
# Container
# =============================================================================

@dataclass
class Container:
    """
    Dependency injection container.

    Services are created lazily and cached, so every caller shares the same
    session and simulator.
    """
    settings: Settings = field(default_factory=Settings)
    display: DisplaySettings = field(default_factory=DisplaySettings)

    _physics: Optional[object] = field(default=None, repr=False)
    _session: Optional[object] = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings, display: Optional[DisplaySettings] = None) -> "Container":
        return cls(settings=settings, display=display or DisplaySettings())

    def physics(self) -> PhysicsConfig:
        if self._physics is None:
            self._physics = self.settings.physics()
        return self._physics

    def analysis_service(self):
        from graphcanvas.application.services.analysis_service import AnalysisService
        return AnalysisService()

    def layout_simulator(self):
        from graphcanvas.domain.services.layout_simulator import LayoutSimulator
        return LayoutSimulator(
            width=self.settings.width,
            height=self.settings.height,
            physics=self.physics(),
            node_radius=self.display.node_radius,
            rng=random.Random(self.settings.seed),
        )

    def session(self):
        """Get the graph session singleton."""
        if self._session is None:
            from graphcanvas.application.services.session import GraphSession
            self._session = GraphSession(
                simulator=self.layout_simulator(),
                analysis_service=self.analysis_service(),
                settings=self.display,
            )
        return self._session

    def animation_loop(self, on_frame: Optional[Callable[[int], None]] = None):
        """Loop ticking the session at the configured frame rate."""
        from graphcanvas.application.services.animation_loop import AnimationLoop
        session = self.session()

        def frame(n: int) -> None:
            session.tick()
            if on_frame is not None:
                on_frame(n)

        return AnimationLoop(frame, fps=self.physics().fps)
