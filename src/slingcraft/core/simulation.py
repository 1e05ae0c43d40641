"""Simulation instance tying setup, stepping and diagnostics together."""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterable

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg
from .diagnostics import compute_diagnostics
from .errors import SimulationDiverged
from .geometry import derive_craft_counts, derive_masses
from .model import BodySnapshot, BodySpec, Diagnostics
from .orbits import initialize_orbits
from .physics import potential_energy, semi_implicit_euler_step
from .registry import BodyRegistry

if TYPE_CHECKING:  # pragma: no cover
    from slingcraft.data.scenarios import Scenario

logger = logging.getLogger(__name__)


class Simulation:
    """A fixed body set advanced one frame at a time.

    Setup runs the mass derivation, then the craft counts, then the orbit
    initializer; the orbit speeds depend on the masses so the order is fixed.
    After setup only :meth:`step` moves bodies. The presentation layer reads
    :attr:`bodies` and :attr:`diagnostics` and may only change craft counts.
    """

    def __init__(self, registry: BodyRegistry, cfg: PhysicsCfg = PHYSICS_CFG) -> None:
        self.cfg = cfg
        self._registry = registry
        self._time = 0.0
        self._step_count = 0

        derive_masses(registry)
        derive_craft_counts(registry, cfg)
        self._central_id = initialize_orbits(registry, cfg)

        self._diagnostics = compute_diagnostics(
            registry.positions(),
            registry.velocities(),
            registry.masses(),
            potential_energy(
                registry.positions(),
                registry.masses(),
                registry.radii(),
                cfg.gravitational_constant,
            ),
        )
        self._check_finite(registry.positions(), registry.velocities(), self._diagnostics)
        logger.info(
            "Simulation ready: %d bodies, central=%s, total energy %.6g",
            len(registry),
            registry.get(self._central_id).name,
            self._diagnostics.total_energy,
        )

    @classmethod
    def from_specs(
        cls,
        specs: Iterable[BodySpec],
        cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> "Simulation":
        return cls(BodyRegistry.from_specs(specs, cfg), cfg)

    @classmethod
    def from_scenario(cls, scenario: "Scenario", cfg: PhysicsCfg = PHYSICS_CFG) -> "Simulation":
        logger.info("Loading scenario '%s'", scenario.name)
        return cls.from_specs(scenario.bodies, cfg)

    @property
    def central_id(self) -> int:
        return self._central_id

    @property
    def time(self) -> float:
        return self._time

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def diagnostics(self) -> Diagnostics:
        return self._diagnostics

    @property
    def bodies(self) -> tuple[BodySnapshot, ...]:
        return self._registry.snapshots()

    def body(self, body_id: int) -> BodySnapshot:
        return self._registry.get(body_id).snapshot()

    def adjust_craft_count(self, body_id: int, delta: int) -> int:
        count = self._registry.adjust_craft_count(body_id, delta)
        logger.debug("craft count of body %d -> %d", body_id, count)
        return count

    def step(self, dt: float) -> Diagnostics:
        """Advance one frame by ``dt`` seconds and return the new diagnostics."""

        dt = float(dt)
        if not math.isfinite(dt) or dt <= 0.0:
            return self._diagnostics

        registry = self._registry
        masses = registry.masses()
        positions, velocities, potential = semi_implicit_euler_step(
            registry.positions(),
            registry.velocities(),
            masses,
            registry.radii(),
            dt,
            self.cfg.gravitational_constant,
        )
        diagnostics = compute_diagnostics(
            positions,
            velocities,
            masses,
            potential,
            time=self._time + dt,
            step_count=self._step_count + 1,
        )
        self._check_finite(positions, velocities, diagnostics)

        registry.store_state(positions, velocities)
        self._time = diagnostics.time
        self._step_count = diagnostics.step_count
        self._diagnostics = diagnostics
        logger.debug(
            "step %d dt=%.4g E=%.6g", self._step_count, dt, diagnostics.total_energy
        )
        return diagnostics

    def _check_finite(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        diagnostics: Diagnostics,
    ) -> None:
        if np.all(np.isfinite(positions)) and np.all(np.isfinite(velocities)) and diagnostics.is_finite():
            return
        logger.error(
            "Non-finite state after step %d (t=%.4g): E_k=%r E_p=%r com=%r",
            self._step_count,
            self._time,
            diagnostics.kinetic_energy,
            diagnostics.potential_energy,
            diagnostics.center_of_mass,
        )
        raise SimulationDiverged(
            f"simulation state became non-finite at step {self._step_count + 1}"
        )


__all__ = ["Simulation"]
