from __future__ import annotations

import math

import numpy as np
import pytest

from slingcraft.core.errors import InvalidBodyConfig
from slingcraft.core.model import Body, BodySpec
from slingcraft.core.registry import BodyRegistry


def test_ids_follow_input_order(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    assert registry.ids() == [0, 1]
    assert registry.get(1).name == "Sat"
    assert len(registry) == 2
    assert registry.positions().shape == (2, 2)
    assert registry.masses().shape == (2,)


def test_default_density_comes_from_config(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    assert registry[0].density == pytest.approx(0.02)


@pytest.mark.parametrize("radius", [0.0, -1.0, math.nan, math.inf])
def test_rejects_non_positive_radius(radius):
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry.from_specs([BodySpec(name="bad", radius=radius, position=(0.0, 0.0))])


def test_rejects_negative_density():
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry.from_specs([BodySpec(name="bad", radius=1.0, position=(0.0, 0.0), density=-0.1)])


@pytest.mark.parametrize("position", [(0.0,), (0.0, 0.0, 0.0), (math.nan, 0.0), ("a", "b")])
def test_rejects_bad_position(position):
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry.from_specs([BodySpec(name="bad", radius=1.0, position=position)])


def test_rejects_empty_body_set():
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry.from_specs([])


def test_invalid_config_is_a_value_error():
    assert issubclass(InvalidBodyConfig, ValueError)


def test_unknown_id_raises_key_error(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    with pytest.raises(KeyError):
        registry.get(42)
    with pytest.raises(KeyError):
        registry.adjust_craft_count(42, 1)


def test_adjust_craft_count_is_clamped(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    assert registry.adjust_craft_count(1, 1) == 1
    assert registry.adjust_craft_count(1, -1) == 0
    assert registry.adjust_craft_count(1, -1) == 0
    for _ in range(15):
        registry.adjust_craft_count(1, 1)
    assert registry.get(1).craft_count == 10


def test_store_state_round_trips(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    positions = np.array([[1.0, 2.0], [3.0, 4.0]])
    velocities = np.array([[0.5, 0.0], [0.0, -0.5]])
    registry.store_state(positions, velocities)
    np.testing.assert_array_equal(registry.positions(), positions)
    np.testing.assert_array_equal(registry.velocities(), velocities)
    positions[0, 0] = 99.0
    assert registry[0].position[0] == 1.0


def test_store_state_rejects_wrong_shape(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    with pytest.raises(ValueError):
        registry.store_state(np.zeros((3, 2)), np.zeros((3, 2)))


def test_snapshots_do_not_track_later_changes(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    snapshot = registry.snapshots()[1]
    registry[1].position = np.array([-5.0, -5.0])
    assert snapshot.position == (20.0, 0.0)
    assert snapshot.id == 1


@pytest.mark.parametrize("radius", [0.0, -3.0, math.nan])
def test_direct_construction_rejects_bad_radius(radius):
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry([Body(id=0, name="bad", radius=radius, density=0.02)])


def test_direct_construction_rejects_negative_mass():
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry([Body(id=0, name="bad", radius=1.0, density=0.02, mass=-1.0)])


def test_direct_construction_rejects_non_finite_velocity():
    body = Body(id=0, name="bad", radius=1.0, density=0.02, velocity=np.array([math.inf, 0.0]))
    with pytest.raises(InvalidBodyConfig):
        BodyRegistry([body])
