"""Read-side energy and center-of-mass reductions."""
from __future__ import annotations

import numpy as np

from .model import Diagnostics


def kinetic_energy(velocities: np.ndarray, masses: np.ndarray) -> float:
    """Sum of 0.5 * m * |v|^2."""

    velocities = np.asarray(velocities, dtype=float).reshape(-1, 2)
    speed_sq = np.einsum("ij,ij->i", velocities, velocities)
    return float(0.5 * np.dot(np.asarray(masses, dtype=float), speed_sq))


def center_of_mass(positions: np.ndarray, masses: np.ndarray) -> tuple[float, float]:
    """Mass-weighted mean position; the origin when there is no mass."""

    masses = np.asarray(masses, dtype=float)
    total_mass = float(masses.sum())
    if total_mass <= 0.0:
        return (0.0, 0.0)
    weighted = masses @ np.asarray(positions, dtype=float).reshape(-1, 2)
    return (float(weighted[0] / total_mass), float(weighted[1] / total_mass))


def total_momentum(velocities: np.ndarray, masses: np.ndarray) -> tuple[float, float]:
    momentum = np.asarray(masses, dtype=float) @ np.asarray(velocities, dtype=float).reshape(-1, 2)
    return (float(momentum[0]), float(momentum[1]))


def compute_diagnostics(
    positions: np.ndarray,
    velocities: np.ndarray,
    masses: np.ndarray,
    potential_energy: float,
    *,
    time: float = 0.0,
    step_count: int = 0,
) -> Diagnostics:
    return Diagnostics(
        potential_energy=float(potential_energy),
        kinetic_energy=kinetic_energy(velocities, masses),
        center_of_mass=center_of_mass(positions, masses),
        time=time,
        step_count=step_count,
    )


__all__ = ["center_of_mass", "compute_diagnostics", "kinetic_energy", "total_momentum"]
