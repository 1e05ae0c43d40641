"""Exception types raised by the simulation core."""
from __future__ import annotations


class SlingcraftError(Exception):
    """Base class for simulation errors."""


class InvalidBodyConfig(SlingcraftError, ValueError):
    """A body or scenario definition violates the setup invariants."""


class SimulationDiverged(SlingcraftError, FloatingPointError):
    """The per-frame step produced a non-finite state or diagnostic."""


__all__ = ["InvalidBodyConfig", "SimulationDiverged", "SlingcraftError"]
