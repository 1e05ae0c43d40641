"""Mass and size-derived attributes of bodies."""
from __future__ import annotations

import math

from .config import PHYSICS_CFG, PhysicsCfg
from .registry import BodyRegistry


def sphere_volume(radius: float) -> float:
    return 4.0 / 3.0 * math.pi * radius**3


def surface_area(radius: float) -> float:
    return 4.0 * math.pi * radius**2


def mass_from_radius(radius: float, density: float = PHYSICS_CFG.density) -> float:
    """Mass of a uniform sphere of the given radius and density."""

    return density * sphere_volume(radius)


def round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def derive_masses(registry: BodyRegistry) -> None:
    """Recompute every body's mass from its radius and density."""

    for body in registry:
        body.mass = mass_from_radius(body.radius, body.density)


def derive_craft_counts(registry: BodyRegistry, cfg: PhysicsCfg = PHYSICS_CFG) -> None:
    """Scale surface area against the largest body into a bounded craft count.

    Leaves existing counts untouched when no body has a positive surface area.
    """

    metrics = [surface_area(body.radius) for body in registry]
    max_metric = max(metrics, default=0.0)
    if max_metric <= 0.0:
        return
    scale = cfg.craft_count_max
    for body, metric in zip(registry, metrics):
        count = round_half_away_from_zero(scale * metric / max_metric)
        body.craft_count = registry.clamp_craft_count(count)


__all__ = [
    "derive_craft_counts",
    "derive_masses",
    "mass_from_radius",
    "round_half_away_from_zero",
    "sphere_volume",
    "surface_area",
]
