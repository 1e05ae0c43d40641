"""Wall-clock frame timing for the host loop."""
from __future__ import annotations

import time
from dataclasses import dataclass, field

from .config import PHYSICS_CFG


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`.

    ``tick`` never returns a negative interval and caps long stalls (window
    drags, breakpoints) at ``max_dt`` so a single frame stays small.
    """

    max_dt: float = PHYSICS_CFG.max_frame_dt
    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return max(0.0, min(dt, self.max_dt))

    def reset(self) -> None:
        self.last_time = time.perf_counter()


__all__ = ["FrameTimer"]
