"""Tests for steering kinematics: turning, walking, flying and contact sweeps."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math

import pytest

from flysim.ai.steering import Steering
from flysim.config import SimulationConfig
from flysim.core.vectors import Vector3


@pytest.fixture
def config():
    return SimulationConfig()


@pytest.fixture
def steering(config):
    return Steering(config)


class TestSteerTowards:
    def test_snaps_within_epsilon(self, steering):
        desired = Vector3(0.005, 0.0, 1.0)
        result = steering.steer_towards(Vector3(0, 0, 1), desired, 0.016)
        assert result.x == pytest.approx(desired.x / desired.length())
        assert result.length() == pytest.approx(1.0)

    def test_partial_turn(self, steering):
        result = steering.steer_towards(Vector3(0, 0, 1), Vector3(1, 0, 0), 0.1, turn_rate=5.0)
        assert result.x == pytest.approx(math.sqrt(0.5))
        assert result.z == pytest.approx(math.sqrt(0.5))

    def test_turn_fraction_capped_at_one(self, steering):
        result = steering.steer_towards(Vector3(0, 0, 1), Vector3(1, 0, 0), 10.0)
        assert result.x == pytest.approx(1.0)
        assert result.z == pytest.approx(0.0)

    def test_result_stays_planar_unit(self, steering):
        result = steering.steer_towards(Vector3(0.6, 0.0, 0.8), Vector3(-1, 0, 0), 0.05)
        assert result.y == 0.0
        assert result.length() == pytest.approx(1.0)


class TestWalk:
    def test_moves_along_facing_at_ground_height(self, steering, config):
        moved = steering.walk(Vector3(0, 0.7, 0), Vector3(1, 0, 0), 0.8, 1.0)
        assert moved.x == pytest.approx(0.8)
        assert moved.z == pytest.approx(0.0)
        assert moved.y == config.min_height

    def test_clamped_to_arena(self, steering, config):
        moved = steering.walk(Vector3(4.9, 0.1, 0), Vector3(1, 0, 0), 0.8, 1.0)
        assert moved.x == config.half_width

    def test_split_steps_match_single_step(self, steering):
        one = steering.walk(Vector3(0, 0.1, 0), Vector3(0, 0, 1), 0.8, 1.0)
        many = Vector3(0, 0.1, 0)
        for _ in range(10):
            many = steering.walk(many, Vector3(0, 0, 1), 0.8, 0.1)
        assert many.z == pytest.approx(one.z)


class TestFlyTowards:
    def test_never_overshoots(self, steering):
        moved = steering.fly_towards(Vector3(0, 1, 0), Vector3(1, 1, 0), 3.0, 1.0)
        assert moved == Vector3(1, 1, 0)

    def test_zero_distance_stays(self, steering):
        p = Vector3(1, 1, 1)
        assert steering.fly_towards(p, p, 3.0, 0.5) == p

    def test_split_steps_match_single_step(self, steering):
        start, dest = Vector3(0, 1, 0), Vector3(4, 1, 0)
        one = steering.fly_towards(start, dest, 3.0, 1.0)
        many = start
        for _ in range(10):
            many = steering.fly_towards(many, dest, 3.0, 0.1)
        assert many.x == pytest.approx(one.x)
        assert many.x == pytest.approx(3.0)

    def test_height_clamped(self, steering, config):
        moved = steering.fly_towards(Vector3(0, 1.45, 0), Vector3(1, 1.45, 0), 1.0, 0.1, bob=0.5)
        assert moved.y == config.max_height
        moved = steering.fly_towards(Vector3(0, 0.12, 0), Vector3(1, 0.12, 0), 1.0, 0.1, bob=-0.5)
        assert moved.y == config.min_height


class TestBob:
    def test_bob_telescopes(self, steering):
        """Bob over a span equals the sum of bobs over its pieces."""
        whole = steering.bob_offset(0.0, 1.0)
        pieces = sum(steering.bob_offset(i * 0.1, (i + 1) * 0.1) for i in range(10))
        assert pieces == pytest.approx(whole)

    def test_bob_bounded_by_amplitude(self, steering, config):
        for i in range(100):
            assert abs(steering.bob_offset(0.0, i * 0.05)) <= 2 * config.bob_amplitude + 1e-12


class TestContact:
    def test_touches_is_a_cylinder(self):
        target = Vector3(0, 0.15, 0)
        assert Steering.touches(Vector3(0.2, 0.15, 0), target, 0.3)
        assert not Steering.touches(Vector3(0.0, 1.0, 0), target, 0.3)
        assert not Steering.touches(Vector3(0.3, 0.15, 0), target, 0.3)

    def test_sweep_catches_pass_through(self, steering):
        target = Vector3(0, 0.15, 0)
        start, end = Vector3(-2, 0.15, 0), Vector3(2, 0.15, 0)
        assert not Steering.touches(start, target, 0.3)
        assert not Steering.touches(end, target, 0.3)
        contact = steering.sweep_contact(start, end, target, 0.3)
        assert contact is not None
        assert Steering.touches(contact, target, 0.3)
        assert contact.x == pytest.approx(0.0)

    def test_sweep_miss(self, steering):
        target = Vector3(0, 0.15, 3.0)
        assert steering.sweep_contact(Vector3(-2, 0.15, 0), Vector3(2, 0.15, 0), target, 0.3) is None

    def test_sweep_zero_length_segment(self, steering):
        p = Vector3(0.1, 0.15, 0)
        assert steering.sweep_contact(p, p, Vector3(0, 0.15, 0), 0.3) == p
