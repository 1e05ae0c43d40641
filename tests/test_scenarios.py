from __future__ import annotations

import json

import pytest

from slingcraft.core.errors import InvalidBodyConfig
from slingcraft.core.simulation import Simulation
from slingcraft.data.scenarios import (
    DEFAULT_SCENARIO_KEY,
    SCENARIO_DEFINITIONS,
    get_scenario,
    load_scenario_file,
)


def test_default_scenario_is_reference_setup():
    scenario = get_scenario(DEFAULT_SCENARIO_KEY)
    assert [spec.name for spec in scenario.bodies] == ["Central", "Sat"]
    assert scenario.bodies[1].position == (20.0, 0.0)


@pytest.mark.parametrize("scenario", SCENARIO_DEFINITIONS, ids=lambda s: s.key)
def test_builtin_scenarios_run(scenario):
    sim = Simulation.from_scenario(scenario)
    for _ in range(50):
        sim.step(0.01)
    assert sim.diagnostics.is_finite()
    assert len(sim.bodies) == len(scenario.bodies)


def test_unknown_scenario():
    with pytest.raises(InvalidBodyConfig):
        get_scenario("nope")


def test_load_scenario_file(tmp_path):
    path = tmp_path / "binary.json"
    path.write_text(
        json.dumps(
            {
                "name": "Binary",
                "bodies": [
                    {"name": "A", "radius": 3, "position": [0, 0]},
                    {"name": "B", "radius": 1, "position": [15, 0], "density": 0.1},
                ],
            }
        ),
        encoding="utf-8",
    )
    scenario = load_scenario_file(path)
    assert scenario.key == "binary"
    assert scenario.name == "Binary"
    assert scenario.bodies[0].density is None
    assert scenario.bodies[1].density == 0.1
    assert scenario.bodies[1].position == (15.0, 0.0)


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        json.dumps([]),
        json.dumps({"bodies": []}),
        json.dumps({"bodies": [{"name": "A", "position": [0, 0]}]}),
        json.dumps({"bodies": [{"name": "A", "radius": 1, "position": [0]}]}),
        json.dumps({"bodies": ["A"]}),
    ],
)
def test_malformed_scenario_files(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(InvalidBodyConfig):
        load_scenario_file(path)


def test_missing_scenario_file(tmp_path):
    with pytest.raises(InvalidBodyConfig):
        load_scenario_file(tmp_path / "missing.json")
