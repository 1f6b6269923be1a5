"""Tests for the behavior transition table and entry handlers.

Covers:
- Every transition row against fixed draws
- Perception is only consulted on the seek branches
- Entry handlers set timers, flags and destinations inside the arena
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math

import pytest

from flysim.ai.states import (
    STATE_HANDLERS,
    BehaviorContext,
    Decision,
    IdleHandler,
    transition,
    wander_destination,
)
from flysim.config import SimulationConfig
from flysim.core.enums import Behavior, Domain
from flysim.core.models import BehaviorState, Creature, Target
from flysim.core.vectors import Vector3
from tests.helpers.scripted_rng import ScriptedRNG

CONFIG = SimulationConfig()
TARGET = Target(id=7, position=Vector3(0.5, 0.15, 0.5))


def _found():
    return TARGET


def _never_called():
    raise AssertionError("perception must not run on this branch")


class TestTransitionTable:
    @pytest.mark.parametrize("draw, expected", [
        (0.0, Behavior.WALKING),
        (0.59, Behavior.WALKING),
        (0.6, Behavior.FLYING),
        (0.99, Behavior.FLYING),
    ])
    def test_idle(self, draw, expected):
        assert transition(Behavior.IDLE, draw, locate=_never_called).behavior == expected

    def test_walking_to_flying(self):
        assert transition(Behavior.WALKING, 0.29, locate=_never_called).behavior == Behavior.FLYING

    def test_walking_to_seeking_when_target_found(self):
        decision = transition(Behavior.WALKING, 0.5, locate=_found)
        assert decision.behavior == Behavior.SEEKING_TARGET
        assert decision.target is TARGET

    def test_walking_seek_without_target_keeps_walking(self):
        decision = transition(Behavior.WALKING, 0.5, locate=lambda: None)
        assert decision.behavior == Behavior.WALKING
        assert decision.resume

    def test_walking_high_draw_keeps_walking(self):
        decision = transition(Behavior.WALKING, 0.7, locate=_never_called)
        assert decision == Decision(Behavior.WALKING, resume=True)

    def test_flying_lands(self):
        assert transition(Behavior.FLYING, 0.1, locate=_never_called).behavior == Behavior.IDLE

    def test_flying_to_seeking(self):
        decision = transition(Behavior.FLYING, 0.2, locate=_found)
        assert decision.behavior == Behavior.SEEKING_TARGET

    def test_flying_seek_without_target_continues(self):
        decision = transition(Behavior.FLYING, 0.39, locate=lambda: None)
        assert decision == Decision(Behavior.FLYING, resume=True)

    def test_flying_high_draw_continues(self):
        decision = transition(Behavior.FLYING, 0.4, locate=_never_called)
        assert decision == Decision(Behavior.FLYING, resume=True)

    @pytest.mark.parametrize("draw, expected", [
        (0.59, Behavior.FLYING),
        (0.6, Behavior.WALKING),
    ])
    def test_seeking_reached(self, draw, expected):
        decision = transition(Behavior.SEEKING_TARGET, draw, reached=True, locate=_never_called)
        assert decision.behavior == expected

    @pytest.mark.parametrize("draw, expected", [
        (0.49, Behavior.FLYING),
        (0.5, Behavior.WALKING),
    ])
    def test_seeking_abandoned(self, draw, expected):
        decision = transition(Behavior.SEEKING_TARGET, draw, expired=True, locate=_never_called)
        assert decision.behavior == expected

    def test_seeking_in_progress_stays(self):
        decision = transition(Behavior.SEEKING_TARGET, 0.1, reached=False, expired=False)
        assert decision.behavior is None


def _context(rng=None, position=Vector3(0.0, 0.1, 0.0), flying=False) -> BehaviorContext:
    return BehaviorContext(
        creature=Creature(position=position, is_flying=flying, is_moving=flying),
        state=BehaviorState(),
        config=CONFIG,
        rng=rng or ScriptedRNG(),
    )


class TestWanderDestination:
    def test_ground_destination(self):
        ctx = _context(ScriptedRNG(WANDER=[0.0, 0.5]))
        dest = wander_destination(ctx, airborne=False)
        assert dest.x == pytest.approx(2.5)
        assert dest.z == pytest.approx(0.0)
        assert dest.y == CONFIG.min_height

    def test_clamped_to_arena(self):
        ctx = _context(ScriptedRNG(WANDER=[0.0, 0.99]), position=Vector3(4.0, 0.1, 0.0))
        dest = wander_destination(ctx, airborne=False)
        assert dest.x == CONFIG.half_width

    def test_airborne_climb_limited(self):
        # distance 1.0 allows climbing 0.5 above the current height
        ctx = _context(ScriptedRNG(WANDER=[0.0, 0.0, 0.9]))
        dest = wander_destination(ctx, airborne=True)
        assert dest.y == pytest.approx(0.1 + 0.5)

    def test_airborne_height_within_bounds(self):
        ctx = _context(ScriptedRNG(WANDER=[0.0, 0.99, 0.99]), position=Vector3(0, 1.4, 0))
        dest = wander_destination(ctx, airborne=True)
        assert CONFIG.min_height <= dest.y <= CONFIG.max_height


class TestHandlers:
    def test_idle_on_ground_settles(self):
        ctx = _context(ScriptedRNG(TIMER=[0.5]))
        IdleHandler().enter(ctx, Decision(Behavior.IDLE))
        assert ctx.state.behavior == Behavior.IDLE
        assert ctx.state.timer == pytest.approx(1.0)
        assert not ctx.creature.is_moving
        assert not ctx.creature.is_flying
        assert ctx.state.heading.length() == pytest.approx(1.0)

    def test_idle_mid_air_starts_landing(self):
        ctx = _context(position=Vector3(0.0, 1.2, 0.0), flying=True)
        IdleHandler().enter(ctx, Decision(Behavior.IDLE))
        assert ctx.state.behavior == Behavior.FLYING
        assert ctx.state.landing
        assert ctx.state.timer is None
        assert not ctx.state.expired
        assert ctx.creature.is_moving
        assert ctx.creature.is_flying
        assert ctx.state.destination.y == CONFIG.min_height

    def test_walking_entry(self):
        rng = ScriptedRNG(TIMER=[0.0], WANDER=[0.25, 0.0])
        ctx = _context(rng, position=Vector3(0.0, 0.4, 0.0))
        STATE_HANDLERS[Behavior.WALKING].enter(ctx, Decision(Behavior.WALKING))
        assert ctx.state.timer == pytest.approx(2.0)
        assert ctx.creature.is_moving and not ctx.creature.is_flying
        assert ctx.creature.position.y == CONFIG.min_height
        assert ctx.state.destination.z == pytest.approx(1.0)
        assert ctx.state.heading.z == pytest.approx(1.0)

    def test_flying_entry_durations(self):
        ctx = _context(ScriptedRNG(TIMER=[0.0, 0.0]))
        STATE_HANDLERS[Behavior.FLYING].enter(ctx, Decision(Behavior.FLYING))
        assert ctx.state.timer == pytest.approx(3.0)
        assert ctx.creature.is_flying and ctx.creature.is_moving
        STATE_HANDLERS[Behavior.FLYING].enter(ctx, Decision(Behavior.FLYING, resume=True))
        assert ctx.state.timer == pytest.approx(2.0)

    def test_seeking_close_ground_target_walks(self):
        ctx = _context()
        STATE_HANDLERS[Behavior.SEEKING_TARGET].enter(ctx, Decision(Behavior.SEEKING_TARGET, TARGET))
        assert ctx.state.behavior == Behavior.SEEKING_TARGET
        assert ctx.state.timer == CONFIG.seek_duration
        assert ctx.creature.current_target_id == TARGET.id
        assert not ctx.creature.is_flying
        assert ctx.state.destination.y == CONFIG.min_height

    def test_seeking_far_target_flies(self):
        far = Target(id=8, position=Vector3(3.0, 0.15, 0.0))
        ctx = _context()
        STATE_HANDLERS[Behavior.SEEKING_TARGET].enter(ctx, Decision(Behavior.SEEKING_TARGET, far))
        assert ctx.creature.is_flying
        assert ctx.state.destination == far.position
        assert ctx.state.heading.x == pytest.approx(1.0)

    def test_seeking_vanished_target_walks(self):
        ctx = _context()
        STATE_HANDLERS[Behavior.SEEKING_TARGET].enter(ctx, Decision(Behavior.SEEKING_TARGET, None))
        assert ctx.state.behavior == Behavior.WALKING
        assert ctx.creature.current_target_id is None

    def test_idle_heading_draw(self):
        rng = ScriptedRNG(WANDER=[0.5])
        ctx = _context(rng)
        IdleHandler.settle(ctx)
        # (0.5 - 0.5) * pi = 0 rad
        assert ctx.state.heading.x == pytest.approx(math.cos(0.0))
        assert rng.calls[Domain.WANDER] == 1
