"""Viewport that frames a scenario and optionally tracks its center of mass."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from slingcraft.core.model import BodySnapshot


class Camera:
    """World/screen transform in pixels per world unit.

    ``fit`` sizes the view from the bodies' extent, and the zoom range is
    derived from that fitted scale. World y points up, screen y points down.
    """

    def __init__(
        self,
        size: tuple[int, int],
        *,
        zoom_range: float = 40.0,
        margin: float = 1.25,
    ) -> None:
        self.size = size
        self.follow_com = False
        self._zoom_range = max(1.0, zoom_range)
        self._margin = max(1.0, margin)
        self._center = np.zeros(2, dtype=float)
        self._ppu = 1.0
        self._min_ppu = 1.0 / self._zoom_range
        self._max_ppu = self._zoom_range
        self._drag_anchor: np.ndarray | None = None

    @property
    def ppu(self) -> float:
        return self._ppu

    @property
    def zoom_bounds(self) -> tuple[float, float]:
        return self._min_ppu, self._max_ppu

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def resize(self, size: tuple[int, int]) -> None:
        self.size = size

    def fit(self, bodies: Sequence[BodySnapshot], center: Sequence[float]) -> None:
        """Center on ``center`` and zoom so every body disc is on screen."""

        self._center = np.asarray(center, dtype=float).copy()
        extent = 1.0
        for body in bodies:
            offset = np.asarray(body.position, dtype=float) - self._center
            extent = max(extent, float(np.hypot(*offset)) + body.radius)
        half_span = max(1, min(self.size)) / 2.0
        fitted = half_span / (extent * self._margin)
        self._min_ppu = fitted / self._zoom_range
        self._max_ppu = fitted * self._zoom_range
        self._ppu = fitted

    def update(self, center_of_mass: Sequence[float], smoothing: float = 0.15) -> None:
        """Ease toward the center of mass while following it."""

        if not self.follow_com or self._drag_anchor is not None:
            return
        target = np.asarray(center_of_mass, dtype=float)
        self._center += (target - self._center) * min(max(smoothing, 0.0), 1.0)

    def zoom_at(self, factor: float, pivot: tuple[int, int]) -> None:
        """Scale the view, keeping the world point under ``pivot`` fixed."""

        anchor = np.array(self.screen_to_world(*pivot))
        self._ppu = min(self._max_ppu, max(self._min_ppu, self._ppu * factor))
        drifted = np.array(self.screen_to_world(*pivot))
        self._center += anchor - drifted

    def begin_drag(self, position: tuple[int, int]) -> None:
        self.follow_com = False
        self._drag_anchor = np.array(self.screen_to_world(*position))

    def drag_to(self, position: tuple[int, int]) -> None:
        if self._drag_anchor is None:
            return
        self._center += self._drag_anchor - np.array(self.screen_to_world(*position))

    def end_drag(self) -> None:
        self._drag_anchor = None

    def pick_tolerance(self, pixels: float) -> float:
        """World-space slack equal to ``pixels`` at the current zoom."""

        return pixels / self._ppu

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        width, height = self.size
        dx, dy = (np.array([x, y], dtype=float) - self._center) * self._ppu
        return int(round(width / 2.0 + dx)), int(round(height / 2.0 - dy))

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        width, height = self.size
        x = (sx - width / 2.0) / self._ppu + self._center[0]
        y = (height / 2.0 - sy) / self._ppu + self._center[1]
        return float(x), float(y)


__all__ = ["Camera"]
