from __future__ import annotations

import numpy as np
import pytest

from slingcraft.core.diagnostics import center_of_mass, total_momentum
from slingcraft.core.physics import (
    compute_accelerations,
    pairwise_acceleration,
    potential_energy,
    semi_implicit_euler_step,
)

G = 50.0


def test_single_body_feels_nothing():
    positions = np.array([[3.0, 4.0]])
    masses = np.array([10.0])
    radii = np.array([1.0])
    np.testing.assert_array_equal(compute_accelerations(positions, masses, radii, G), [[0.0, 0.0]])
    assert potential_energy(positions, masses, radii, G) == 0.0


def test_empty_body_set():
    empty = np.zeros((0, 2))
    assert compute_accelerations(empty, np.zeros(0), np.zeros(0), G).shape == (0, 2)
    assert potential_energy(empty, np.zeros(0), np.zeros(0), G) == 0.0


def test_acceleration_points_at_attractor():
    accel = pairwise_acceleration(np.array([0.0, 0.0]), np.array([10.0, 0.0]), 1.0, 1.0, 2.0, G)
    np.testing.assert_allclose(accel, [G * 2.0 / 100.0, 0.0])


@pytest.mark.parametrize(
    "pos_i, pos_j, m_i, m_j, r_i, r_j",
    [
        ((0.0, 0.0), (10.0, 0.0), 1.0, 5.0, 1.0, 2.0),
        ((-3.0, 7.0), (4.5, -2.0), 12.0, 0.3, 0.5, 0.5),
        ((1.0, 1.0), (1.5, 1.2), 2.0, 3.0, 1.0, 1.0),
    ],
)
def test_pair_forces_are_equal_and_opposite(pos_i, pos_j, m_i, m_j, r_i, r_j):
    pos_i = np.array(pos_i)
    pos_j = np.array(pos_j)
    on_i = pairwise_acceleration(pos_i, pos_j, r_i, r_j, m_j, G)
    on_j = pairwise_acceleration(pos_j, pos_i, r_j, r_i, m_i, G)
    np.testing.assert_allclose(m_i * on_i, -m_j * on_j, rtol=1e-12)


def test_distance_floor_for_coincident_bodies():
    positions = np.array([[2.0, 2.0], [2.0, 2.0]])
    masses = np.array([4.0, 6.0])
    radii = np.array([1.0, 2.0])
    accelerations = compute_accelerations(positions, masses, radii, G)
    assert np.all(np.isfinite(accelerations))
    bound = G * 6.0 / (1.0 + 2.0) ** 2
    assert np.hypot(*accelerations[0]) <= bound
    energy = potential_energy(positions, masses, radii, G)
    assert energy == pytest.approx(-G * 4.0 * 6.0 / 3.0)


def test_distance_floor_for_overlapping_bodies():
    accel = pairwise_acceleration(np.array([0.0, 0.0]), np.array([1.0, 0.0]), 2.0, 3.0, 7.0, G)
    np.testing.assert_allclose(accel, [G * 7.0 / 25.0, 0.0])


def test_potential_counts_each_pair_once():
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    masses = np.array([2.0, 3.0])
    radii = np.array([1.0, 1.0])
    assert potential_energy(positions, masses, radii, G) == pytest.approx(-30.0)


def test_three_body_potential():
    positions = np.array([[0.0, 0.0], [3.0, 0.0], [0.0, 4.0]])
    masses = np.array([1.0, 2.0, 3.0])
    radii = np.array([0.1, 0.1, 0.1])
    expected = -G * (1 * 2 / 3.0 + 1 * 3 / 4.0 + 2 * 3 / 5.0)
    assert potential_energy(positions, masses, radii, G) == pytest.approx(expected)


def test_position_uses_updated_velocity():
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    velocities = np.zeros((2, 2))
    masses = np.array([1.0, 4.0])
    radii = np.array([1.0, 1.0])
    dt = 0.1
    new_pos, new_vel, _ = semi_implicit_euler_step(positions, velocities, masses, radii, dt, G)
    a0 = G * 4.0 / 100.0
    assert new_vel[0, 0] == pytest.approx(a0 * dt)
    # Explicit Euler would leave the body where it was.
    assert new_pos[0, 0] == pytest.approx(a0 * dt * dt)


def test_step_returns_potential_of_incoming_snapshot():
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    velocities = np.array([[0.0, 0.0], [0.0, 3.0]])
    masses = np.array([2.0, 3.0])
    radii = np.array([1.0, 1.0])
    _, _, potential = semi_implicit_euler_step(positions, velocities, masses, radii, 0.5, G)
    assert potential == pytest.approx(-30.0)


def test_step_does_not_mutate_inputs():
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    velocities = np.array([[0.0, -1.0], [0.0, 1.0]])
    before = (positions.copy(), velocities.copy())
    semi_implicit_euler_step(positions, velocities, np.array([1.0, 1.0]), np.array([1.0, 1.0]), 0.1, G)
    np.testing.assert_array_equal(positions, before[0])
    np.testing.assert_array_equal(velocities, before[1])


@pytest.mark.parametrize("dt", [0.0, -0.5])
def test_non_positive_dt_is_a_noop(dt):
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    velocities = np.array([[0.0, -1.0], [0.0, 1.0]])
    new_pos, new_vel, _ = semi_implicit_euler_step(
        positions, velocities, np.array([1.0, 1.0]), np.array([1.0, 1.0]), dt, G
    )
    np.testing.assert_array_equal(new_pos, positions)
    np.testing.assert_array_equal(new_vel, velocities)


def test_momentum_is_conserved():
    positions = np.array([[0.0, 0.0], [12.0, 1.0], [-7.0, 9.0]])
    velocities = np.array([[0.1, 0.0], [0.0, 2.0], [-1.5, 0.3]])
    masses = np.array([10.0, 0.7, 1.3])
    radii = np.array([5.0, 1.0, 1.5])
    before = np.array(total_momentum(velocities, masses))
    for _ in range(200):
        positions, velocities, _ = semi_implicit_euler_step(positions, velocities, masses, radii, 0.01, G)
    np.testing.assert_allclose(total_momentum(velocities, masses), before, atol=1e-9)


def test_center_of_mass_fixed_with_zero_momentum():
    positions = np.array([[-10.0, 0.0], [10.0, 0.0], [0.0, 15.0]])
    masses = np.array([3.0, 3.0, 1.0])
    velocities = np.array([[0.0, -2.0], [0.0, 2.0], [0.0, 0.0]])
    radii = np.array([2.0, 2.0, 1.0])
    assert total_momentum(velocities, masses) == pytest.approx((0.0, 0.0))
    start = center_of_mass(positions, masses)
    for _ in range(500):
        positions, velocities, _ = semi_implicit_euler_step(positions, velocities, masses, radii, 0.01, G)
    assert center_of_mass(positions, masses) == pytest.approx(start, abs=1e-9)
