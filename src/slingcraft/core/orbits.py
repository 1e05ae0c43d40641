"""Initial circular-orbit velocities around the dominant mass."""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg
from .registry import BodyRegistry

logger = logging.getLogger(__name__)


def find_central_index(masses: Sequence[float]) -> int:
    """Index of the heaviest body; on a tie the earliest body wins."""

    if len(masses) == 0:
        raise ValueError("cannot pick a central body from an empty set")
    # np.argmax returns the first occurrence of the maximum.
    return int(np.argmax(np.asarray(masses, dtype=float)))


def circular_orbit_speed(
    central_mass: float,
    distance: float,
    gravitational_constant: float = PHYSICS_CFG.gravitational_constant,
) -> float:
    """Speed of a circular two-body orbit: v = sqrt(G * M / r)."""

    if distance <= 0.0:
        return 0.0
    return math.sqrt(gravitational_constant * central_mass / distance)


def circular_orbit_velocity(
    position: np.ndarray,
    central_position: np.ndarray,
    central_mass: float,
    gravitational_constant: float = PHYSICS_CFG.gravitational_constant,
) -> np.ndarray:
    """Counter-clockwise circular-orbit velocity, zero for a co-located body."""

    direction = np.asarray(position, dtype=float) - np.asarray(central_position, dtype=float)
    distance = float(np.hypot(direction[0], direction[1]))
    if distance <= 0.0:
        return np.zeros(2, dtype=float)
    tangent = np.array([-direction[1], direction[0]], dtype=float) / distance
    return tangent * circular_orbit_speed(central_mass, distance, gravitational_constant)


def initialize_orbits(registry: BodyRegistry, cfg: PhysicsCfg = PHYSICS_CFG) -> int:
    """Set every velocity from the two-body approximation; returns the central id.

    Masses must already be derived.
    """

    central = registry[find_central_index(registry.masses())]
    central.velocity = np.zeros(2, dtype=float)
    for body in registry:
        if body is central:
            continue
        body.velocity = circular_orbit_velocity(
            body.position,
            central.position,
            central.mass,
            cfg.gravitational_constant,
        )
        if np.array_equal(body.position, central.position):
            logger.warning("%s shares the central position; left without an orbit", body.name)
    logger.debug("central body %s (mass %.4g)", central.name, central.mass)
    return central.id


__all__ = [
    "circular_orbit_speed",
    "circular_orbit_velocity",
    "find_central_index",
    "initialize_orbits",
]
