from __future__ import annotations

import math

import pytest

from slingcraft.core.config import PhysicsCfg
from slingcraft.core.geometry import (
    derive_craft_counts,
    derive_masses,
    mass_from_radius,
    round_half_away_from_zero,
    surface_area,
)
from slingcraft.core.model import Body, BodySpec
from slingcraft.core.registry import BodyRegistry


def test_mass_follows_density_law():
    assert mass_from_radius(5.0, 2.0e-2) == pytest.approx(0.02 * 4.0 / 3.0 * math.pi * 125.0)
    assert mass_from_radius(5.0, 2.0e-2) == pytest.approx(10.47, abs=0.01)


def test_derive_masses_uses_each_body_density():
    registry = BodyRegistry.from_specs(
        [
            BodySpec(name="a", radius=3.0, position=(0.0, 0.0)),
            BodySpec(name="b", radius=1.5, position=(9.0, 0.0), density=0.5),
        ]
    )
    derive_masses(registry)
    assert registry[0].mass == pytest.approx(0.02 * 4.0 / 3.0 * math.pi * 27.0)
    assert registry[1].mass == pytest.approx(0.5 * 4.0 / 3.0 * math.pi * 1.5**3)


def test_zero_density_gives_zero_mass():
    registry = BodyRegistry.from_specs([BodySpec(name="ghost", radius=1.0, position=(0.0, 0.0), density=0.0)])
    derive_masses(registry)
    assert registry[0].mass == 0.0


def test_round_half_away_from_zero():
    assert round_half_away_from_zero(2.5) == 3
    assert round_half_away_from_zero(1.49) == 1
    assert round_half_away_from_zero(-2.5) == -3
    assert round_half_away_from_zero(0.0) == 0


def test_craft_counts_scale_with_surface_area(slingcraft_specs):
    registry = BodyRegistry.from_specs(slingcraft_specs)
    derive_craft_counts(registry)
    # 10 * 4 / 25 = 1.6
    assert [body.craft_count for body in registry] == [10, 2]


def test_craft_counts_round_exact_half_up():
    registry = BodyRegistry.from_specs(
        [
            BodySpec(name="big", radius=2.0, position=(0.0, 0.0)),
            BodySpec(name="small", radius=1.0, position=(10.0, 0.0)),
        ]
    )
    derive_craft_counts(registry)
    assert surface_area(1.0) / surface_area(2.0) == 0.25
    assert registry[1].craft_count == 3


def test_craft_counts_respect_configured_bounds():
    cfg = PhysicsCfg(craft_count_max=4)
    registry = BodyRegistry.from_specs(
        [BodySpec(name="a", radius=1.0, position=(0.0, 0.0))], cfg
    )
    derive_craft_counts(registry, cfg)
    assert registry[0].craft_count == 4


def test_craft_counts_noop_without_positive_metric(monkeypatch):
    registry = BodyRegistry([Body(id=0, name="flat", radius=1.0, density=0.02, craft_count=7)])
    monkeypatch.setattr("slingcraft.core.geometry.surface_area", lambda radius: 0.0)
    derive_craft_counts(registry)
    assert registry[0].craft_count == 7
