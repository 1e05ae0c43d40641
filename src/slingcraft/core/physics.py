"""Gravity and time integration for the body set.

All functions work on plain numpy arrays: ``positions`` and ``velocities``
have shape ``(n, 2)``, ``masses`` and ``radii`` have shape ``(n,)``. Nothing
here mutates its inputs.

The separation between two bodies is floored at the sum of their radii, so
overlapping or coincident bodies feel a bounded pull instead of a singular
one. The same floor and the same gravitational constant are used for the
acceleration and for the potential energy.
"""
from __future__ import annotations

import math

import numpy as np

from .config import PHYSICS_CFG


def floored_distance_sq(
    direction: np.ndarray,
    radius_i: float,
    radius_j: float,
) -> float:
    min_dist_sq = (radius_i + radius_j) ** 2
    return max(float(direction[0] * direction[0] + direction[1] * direction[1]), min_dist_sq)


def pairwise_acceleration(
    pos_i: np.ndarray,
    pos_j: np.ndarray,
    radius_i: float,
    radius_j: float,
    mass_j: float,
    gravitational_constant: float = PHYSICS_CFG.gravitational_constant,
) -> np.ndarray:
    """Acceleration of body i due to body j."""

    direction = np.asarray(pos_j, dtype=float) - np.asarray(pos_i, dtype=float)
    length = float(np.hypot(direction[0], direction[1]))
    if length == 0.0:
        # Coincident bodies have no defined pull direction.
        return np.zeros(2, dtype=float)
    dist_sq = floored_distance_sq(direction, radius_i, radius_j)
    magnitude = gravitational_constant * mass_j / dist_sq
    return direction / length * magnitude


def compute_accelerations(
    positions: np.ndarray,
    masses: np.ndarray,
    radii: np.ndarray,
    gravitational_constant: float = PHYSICS_CFG.gravitational_constant,
) -> np.ndarray:
    """Direct O(n^2) sum of pairwise accelerations over ordered pairs."""

    n = len(positions)
    accelerations = np.zeros((n, 2), dtype=float)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            accelerations[i] += pairwise_acceleration(
                positions[i],
                positions[j],
                radii[i],
                radii[j],
                masses[j],
                gravitational_constant,
            )
    return accelerations


def potential_energy(
    positions: np.ndarray,
    masses: np.ndarray,
    radii: np.ndarray,
    gravitational_constant: float = PHYSICS_CFG.gravitational_constant,
) -> float:
    """Sum of -G m_i m_j / r_ij over unordered pairs, each counted once."""

    n = len(positions)
    energy = 0.0
    for i in range(n):
        for j in range(i + 1, n):
            direction = positions[j] - positions[i]
            distance = math.sqrt(floored_distance_sq(direction, radii[i], radii[j]))
            if distance == 0.0:
                continue
            energy += -gravitational_constant * masses[i] * masses[j] / distance
    return energy


def semi_implicit_euler_step(
    positions: np.ndarray,
    velocities: np.ndarray,
    masses: np.ndarray,
    radii: np.ndarray,
    dt: float,
    gravitational_constant: float = PHYSICS_CFG.gravitational_constant,
) -> tuple[np.ndarray, np.ndarray, float]:
    """Advance one frame with symplectic Euler.

    Accelerations and the potential energy come from the incoming position
    snapshot. All velocities are updated first, then all positions from the
    updated velocities. Returns ``(positions, velocities, potential_energy)``.
    A non-positive ``dt`` leaves the state unchanged.
    """

    positions = np.array(positions, dtype=float)
    velocities = np.array(velocities, dtype=float)
    potential = potential_energy(positions, masses, radii, gravitational_constant)
    if not dt > 0.0:
        return positions, velocities, potential

    accelerations = compute_accelerations(positions, masses, radii, gravitational_constant)
    velocities += accelerations * dt
    positions += velocities * dt
    return positions, velocities, potential


__all__ = [
    "compute_accelerations",
    "floored_distance_sq",
    "pairwise_acceleration",
    "potential_energy",
    "semi_implicit_euler_step",
]
