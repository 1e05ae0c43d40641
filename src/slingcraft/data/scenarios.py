"""Scenario definitions for preset starting bodies.

Scenario files are JSON documents of the form::

    {
      "name": "Human-friendly name",
      "description": "Optional description",
      "bodies": [
        {"name": "Central", "radius": 5.0, "position": [0.0, 0.0]},
        {"name": "Sat", "radius": 2.0, "position": [20.0, 0.0], "density": 0.02}
      ]
    }

Velocities are never read from a scenario; they come from the orbit
initializer.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from slingcraft.core.errors import InvalidBodyConfig
from slingcraft.core.model import BodySpec


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    description: str
    bodies: tuple[BodySpec, ...]


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="slingcraft",
        name="Slingcraft",
        description="One central mass and a single satellite on a circular orbit.",
        bodies=(
            BodySpec(name="Central", radius=5.0, position=(0.0, 0.0)),
            BodySpec(name="Sat", radius=2.0, position=(20.0, 0.0)),
        ),
    ),
    Scenario(
        key="moons",
        name="Moons",
        description="A central mass with three moons at increasing distances.",
        bodies=(
            BodySpec(name="Central", radius=6.0, position=(0.0, 0.0)),
            BodySpec(name="Io", radius=1.0, position=(18.0, 0.0)),
            BodySpec(name="Europa", radius=1.5, position=(0.0, -28.0)),
            BodySpec(name="Ganymede", radius=2.0, position=(-40.0, 0.0)),
        ),
    ),
    Scenario(
        key="twin",
        name="Twin",
        description="Two equal masses; the first listed body anchors the orbit.",
        bodies=(
            BodySpec(name="Castor", radius=4.0, position=(-12.0, 0.0)),
            BodySpec(name="Pollux", radius=4.0, position=(12.0, 0.0)),
        ),
    ),
    Scenario(
        key="crowded",
        name="Crowded",
        description="Six light satellites close enough to perturb each other.",
        bodies=(
            BodySpec(name="Central", radius=7.0, position=(0.0, 0.0)),
            BodySpec(name="A", radius=0.8, position=(16.0, 0.0)),
            BodySpec(name="B", radius=0.8, position=(0.0, 19.0)),
            BodySpec(name="C", radius=1.2, position=(-22.0, 0.0)),
            BodySpec(name="D", radius=1.2, position=(0.0, -25.0)),
            BodySpec(name="E", radius=1.6, position=(30.0, 10.0)),
            BodySpec(name="F", radius=1.6, position=(-30.0, -14.0)),
        ),
    ),
)

SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KEY = SCENARIO_DISPLAY_ORDER[0]


def get_scenario(key: str) -> Scenario:
    try:
        return SCENARIOS[key]
    except KeyError:
        known = ", ".join(SCENARIO_DISPLAY_ORDER)
        raise InvalidBodyConfig(f"unknown scenario {key!r} (known: {known})") from None


def _body_spec_from_dict(data: object, index: int) -> BodySpec:
    if not isinstance(data, dict):
        raise InvalidBodyConfig(f"body #{index} must be an object")
    try:
        position = data["position"]
        density = data.get("density")
        return BodySpec(
            name=str(data.get("name", f"Body {index}")),
            radius=float(data["radius"]),
            position=(float(position[0]), float(position[1])),
            density=None if density is None else float(density),
        )
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise InvalidBodyConfig(f"body #{index} is malformed: {exc}") from exc


def load_scenario_file(path: str | Path) -> Scenario:
    """Read a scenario from a JSON file."""

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidBodyConfig(f"cannot read scenario file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidBodyConfig(f"{path}: top level must be an object")
    raw_bodies = data.get("bodies")
    if not isinstance(raw_bodies, list) or not raw_bodies:
        raise InvalidBodyConfig(f"{path}: 'bodies' must be a non-empty list")
    bodies = tuple(_body_spec_from_dict(item, idx) for idx, item in enumerate(raw_bodies))
    return Scenario(
        key=path.stem,
        name=str(data.get("name") or path.stem),
        description=str(data.get("description", "")),
        bodies=bodies,
    )


__all__ = [
    "DEFAULT_SCENARIO_KEY",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
    "get_scenario",
    "load_scenario_file",
]
