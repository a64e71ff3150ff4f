"""
Animation Loop

Single-threaded frame scheduler driving the layout at a bounded rate.
The layout never finishes on its own, so the loop runs until stop() is
called from a frame callback or until an optional frame limit is reached.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional


FrameCallback = Callable[[int], None]


class AnimationLoop:
    """Calls ``on_frame(frame_number)`` at most ``fps`` times per second."""

    def __init__(
        self,
        on_frame: FrameCallback,
        fps: int = 60,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.on_frame = on_frame
        self.fps = fps
        self.frames = 0
        self._clock = clock
        self._sleep = sleep
        self._running = False
        self.logger = logging.getLogger(__name__)

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self, max_frames: Optional[int] = None) -> int:
        """Run frames until stopped; returns the number of frames executed."""
        self._running = True
        executed = 0
        next_due = self._clock()
        self.logger.debug("Animation loop started at %d FPS", self.fps)

        while self._running and (max_frames is None or executed < max_frames):
            delay = next_due - self._clock()
            if delay > 0:
                self._sleep(delay)
            self.on_frame(self.frames)
            self.frames += 1
            executed += 1
            # Do not try to catch up after a slow frame
            next_due = max(next_due + self.frame_interval, self._clock())

        self._running = False
        self.logger.debug("Animation loop stopped after %d frames", executed)
        return executed
