"""Data models for the simulated bodies and per-frame diagnostics."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class BodySpec:
    """Setup input for one body. Velocity is derived, never supplied."""

    name: str
    radius: float
    position: tuple[float, float]
    density: float | None = None


@dataclass
class Body:
    """Mutable state for one simulated body."""

    id: int
    name: str
    radius: float
    density: float
    position: np.ndarray = field(
        default_factory=lambda: np.zeros(2, dtype=float)
    )
    velocity: np.ndarray = field(
        default_factory=lambda: np.zeros(2, dtype=float)
    )
    mass: float = 0.0
    craft_count: int = 0

    def snapshot(self) -> "BodySnapshot":
        return BodySnapshot(
            id=self.id,
            name=self.name,
            position=(float(self.position[0]), float(self.position[1])),
            velocity=(float(self.velocity[0]), float(self.velocity[1])),
            radius=self.radius,
            mass=self.mass,
            craft_count=self.craft_count,
        )


@dataclass(frozen=True)
class BodySnapshot:
    """Read-only view of a body handed to the presentation layer."""

    id: int
    name: str
    position: tuple[float, float]
    velocity: tuple[float, float]
    radius: float
    mass: float
    craft_count: int

    @property
    def speed(self) -> float:
        return float(np.hypot(*self.velocity))


@dataclass(frozen=True)
class Diagnostics:
    """Energy and center-of-mass readings for one frame."""

    potential_energy: float
    kinetic_energy: float
    center_of_mass: tuple[float, float]
    time: float = 0.0
    step_count: int = 0

    @property
    def total_energy(self) -> float:
        return self.kinetic_energy + self.potential_energy

    def is_finite(self) -> bool:
        values = (
            self.potential_energy,
            self.kinetic_energy,
            self.center_of_mass[0],
            self.center_of_mass[1],
        )
        return bool(np.all(np.isfinite(values)))


__all__ = ["Body", "BodySnapshot", "BodySpec", "Diagnostics"]
