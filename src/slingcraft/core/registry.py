"""Authoritative, fixed set of simulated bodies."""
from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg
from .errors import InvalidBodyConfig
from .model import Body, BodySnapshot, BodySpec


def _validated_position(spec: BodySpec) -> np.ndarray:
    try:
        position = np.asarray(spec.position, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidBodyConfig(f"{spec.name}: position is not numeric") from exc
    if position.shape != (2,):
        raise InvalidBodyConfig(
            f"{spec.name}: position must have two components, got shape {position.shape}"
        )
    if not np.all(np.isfinite(position)):
        raise InvalidBodyConfig(f"{spec.name}: position must be finite")
    return position


def body_from_spec(body_id: int, spec: BodySpec, cfg: PhysicsCfg = PHYSICS_CFG) -> Body:
    """Validate ``spec`` and build a body with zero velocity and no mass yet."""

    try:
        radius = float(spec.radius)
        density = cfg.density if spec.density is None else float(spec.density)
    except (TypeError, ValueError) as exc:
        raise InvalidBodyConfig(f"{spec.name}: radius and density must be numeric") from exc
    if not math.isfinite(radius) or radius <= 0.0:
        raise InvalidBodyConfig(f"{spec.name}: radius must be positive, got {spec.radius!r}")
    if not math.isfinite(density) or density < 0.0:
        raise InvalidBodyConfig(
            f"{spec.name}: density must be non-negative, got {spec.density!r}"
        )
    return Body(
        id=body_id,
        name=spec.name,
        radius=radius,
        density=density,
        position=_validated_position(spec),
    )


def _check_vector(body: Body, label: str, value: np.ndarray) -> None:
    try:
        vector = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidBodyConfig(f"{body.name}: {label} is not numeric") from exc
    if vector.shape != (2,) or not np.all(np.isfinite(vector)):
        raise InvalidBodyConfig(f"{body.name}: {label} must be a finite 2-vector")


def validate_body(body: Body) -> None:
    """Reject bodies that break the setup invariants, however they were built."""

    try:
        radius, density, mass = float(body.radius), float(body.density), float(body.mass)
    except (TypeError, ValueError) as exc:
        raise InvalidBodyConfig(f"{body.name}: radius, density and mass must be numeric") from exc
    if not math.isfinite(radius) or radius <= 0.0:
        raise InvalidBodyConfig(f"{body.name}: radius must be positive, got {body.radius!r}")
    if not math.isfinite(density) or density < 0.0:
        raise InvalidBodyConfig(
            f"{body.name}: density must be non-negative, got {body.density!r}"
        )
    if not math.isfinite(mass) or mass < 0.0:
        raise InvalidBodyConfig(f"{body.name}: mass must be non-negative, got {body.mass!r}")
    _check_vector(body, "position", body.position)
    _check_vector(body, "velocity", body.velocity)


class BodyRegistry:
    """Ordered body table; ids are assigned once and never reused."""

    def __init__(self, bodies: Sequence[Body], cfg: PhysicsCfg = PHYSICS_CFG) -> None:
        if not bodies:
            raise InvalidBodyConfig("at least one body is required")
        for body in bodies:
            validate_body(body)
        self._cfg = cfg
        self._bodies = list(bodies)
        self._index = {body.id: idx for idx, body in enumerate(self._bodies)}
        if len(self._index) != len(self._bodies):
            raise InvalidBodyConfig("body ids must be unique")

    @classmethod
    def from_specs(
        cls,
        specs: Iterable[BodySpec],
        cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> "BodyRegistry":
        bodies = [body_from_spec(idx, spec, cfg) for idx, spec in enumerate(specs)]
        return cls(bodies, cfg)

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __getitem__(self, index: int) -> Body:
        return self._bodies[index]

    def get(self, body_id: int) -> Body:
        try:
            return self._bodies[self._index[body_id]]
        except KeyError:
            raise KeyError(f"unknown body id {body_id!r}") from None

    def ids(self) -> list[int]:
        return [body.id for body in self._bodies]

    def positions(self) -> np.ndarray:
        return np.array([body.position for body in self._bodies], dtype=float)

    def velocities(self) -> np.ndarray:
        return np.array([body.velocity for body in self._bodies], dtype=float)

    def masses(self) -> np.ndarray:
        return np.array([body.mass for body in self._bodies], dtype=float)

    def radii(self) -> np.ndarray:
        return np.array([body.radius for body in self._bodies], dtype=float)

    def store_state(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        """Write back a full frame of positions and velocities."""

        n = len(self._bodies)
        if positions.shape != (n, 2) or velocities.shape != (n, 2):
            raise ValueError(
                f"state arrays must have shape {(n, 2)}, "
                f"got {positions.shape} and {velocities.shape}"
            )
        for idx, body in enumerate(self._bodies):
            body.position = positions[idx].copy()
            body.velocity = velocities[idx].copy()

    def clamp_craft_count(self, value: int) -> int:
        return max(self._cfg.craft_count_min, min(self._cfg.craft_count_max, int(value)))

    def adjust_craft_count(self, body_id: int, delta: int) -> int:
        body = self.get(body_id)
        body.craft_count = self.clamp_craft_count(body.craft_count + int(delta))
        return body.craft_count

    def snapshots(self) -> tuple[BodySnapshot, ...]:
        return tuple(body.snapshot() for body in self._bodies)


__all__ = ["BodyRegistry", "body_from_spec", "validate_body"]
