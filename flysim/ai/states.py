"""Behavior state machine — transition table and per-state entry handlers.

Architecture:
  - ``transition`` is a pure function of (current behavior, one uniform
    draw, reached/expired flags, a perception callback).  It owns the
    probabilities and nothing else, so it can be tested with fixed draws.
  - Each behavior has a handler class whose ``enter`` method samples the
    state's timer and destination and sets the creature's motion flags.
  - Handlers are registered in STATE_HANDLERS by Behavior key.

State machine:
  IDLE → WALKING (60%) | FLYING
  WALKING → FLYING (30%) | SEEKING_TARGET (40%, if a target is noticed) | WALKING
  FLYING → landing, then IDLE on touchdown (15%) | SEEKING_TARGET (25%, if noticed) | FLYING
  SEEKING_TARGET → FLYING (60%) | WALKING once the target is reached,
                   FLYING (50%) | WALKING when the seek times out
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from flysim.core.enums import Behavior, Domain
from flysim.core.vectors import Vector3, clamp, direction_to, normalize, planar_distance
from flysim.systems.rng import uniform

if TYPE_CHECKING:
    from flysim.config import SimulationConfig
    from flysim.core.models import BehaviorState, Creature, Target
    from flysim.systems.rng import RandomSource


# Transition thresholds against a single uniform draw
IDLE_TO_WALK = 0.6
WALK_TO_FLY = 0.3
WALK_TO_SEEK = 0.7
FLY_TO_LAND = 0.15
FLY_TO_SEEK = 0.4
SEEK_DONE_TO_FLY = 0.6
SEEK_ABANDON_TO_FLY = 0.5


# =====================================================================
# Transition function
# =====================================================================

@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of a re-decision.

    behavior: next behavior, or None to stay in the current one.
    target:   the target to seek (SEEKING_TARGET only).
    resume:   re-entering the same behavior with a fresh leg.
    """

    behavior: Behavior | None
    target: Target | None = None
    resume: bool = False


STAY = Decision(None)


def transition(
    current: Behavior,
    draw: float,
    *,
    reached: bool = False,
    expired: bool = True,
    locate: Callable[[], Target | None] = lambda: None,
) -> Decision:
    """Pick the next behavior from one uniform *draw* in [0, 1).

    *locate* is only called on the branches that look for a target, so the
    perception draw is consumed only when a search is actually attempted.
    """
    if current == Behavior.IDLE:
        return Decision(Behavior.WALKING if draw < IDLE_TO_WALK else Behavior.FLYING)

    if current == Behavior.WALKING:
        if draw < WALK_TO_FLY:
            return Decision(Behavior.FLYING)
        if draw < WALK_TO_SEEK:
            target = locate()
            if target is not None:
                return Decision(Behavior.SEEKING_TARGET, target)
        return Decision(Behavior.WALKING, resume=True)

    if current == Behavior.FLYING:
        if draw < FLY_TO_LAND:
            return Decision(Behavior.IDLE)
        if draw < FLY_TO_SEEK:
            target = locate()
            if target is not None:
                return Decision(Behavior.SEEKING_TARGET, target)
        return Decision(Behavior.FLYING, resume=True)

    # SEEKING_TARGET
    if reached:
        return Decision(Behavior.FLYING if draw < SEEK_DONE_TO_FLY else Behavior.WALKING)
    if expired:
        return Decision(Behavior.FLYING if draw < SEEK_ABANDON_TO_FLY else Behavior.WALKING)
    return STAY


# =====================================================================
# Behavior context: everything an entry handler touches
# =====================================================================

@dataclass(slots=True)
class BehaviorContext:
    creature: Creature
    state: BehaviorState
    config: SimulationConfig
    rng: RandomSource

    def sample(self, domain: Domain, bounds: tuple[float, float]) -> float:
        low, high = bounds
        return uniform(self.rng, domain, low, high)

    def aim_at(self, destination: Vector3) -> None:
        self.state.destination = destination
        self.state.heading = direction_to(self.creature.position, destination)

    def ground(self) -> None:
        """Pin the creature to the floor."""
        self.creature.position = self.creature.position.with_y(self.config.min_height)


def wander_destination(ctx: BehaviorContext, airborne: bool) -> Vector3:
    """Random point 1–4 units away, clamped to the arena.

    Airborne destinations prefer cruise altitude but cannot climb more
    than ``max_climb_ratio`` per unit of planar distance.
    """
    cfg = ctx.config
    pos = ctx.creature.position
    angle = ctx.sample(Domain.WANDER, (0.0, 2 * math.pi))
    distance = ctx.sample(Domain.WANDER, cfg.wander_distance)
    half = cfg.half_width

    height = cfg.min_height
    if airborne:
        cruise = ctx.sample(Domain.WANDER, cfg.cruise_height)
        height = min(max(cfg.min_height, cruise), pos.y + distance * cfg.max_climb_ratio)
        height = clamp(height, cfg.min_height, cfg.max_height)

    return Vector3(
        clamp(pos.x + math.cos(angle) * distance, -half, half),
        height,
        clamp(pos.z + math.sin(angle) * distance, -half, half),
    )


# =====================================================================
# Handlers
# =====================================================================

class StateHandler(ABC):
    """Abstract base for behavior entry handlers."""

    @abstractmethod
    def enter(self, ctx: BehaviorContext, decision: Decision) -> None:
        ...


class IdleHandler(StateHandler):
    """Stand still and look around on the ground.

    Idle is never airborne. Chosen mid-air, it turns the flight into a
    landing leg (still FLYING, no timer) that ends in ``settle`` once the
    ground point is reached.
    """

    def enter(self, ctx: BehaviorContext, decision: Decision) -> None:
        if ctx.creature.is_flying:
            ctx.state.behavior = Behavior.FLYING
            ctx.state.landing = True
            ctx.state.timer = None
            ctx.creature.is_moving = True
            ctx.aim_at(wander_destination(ctx, airborne=False))
            return
        self.settle(ctx)

    @staticmethod
    def settle(ctx: BehaviorContext) -> None:
        """Grounded idle: stop, pick a new facing, wait 0–2 s."""
        state, creature = ctx.state, ctx.creature
        state.behavior = Behavior.IDLE
        state.landing = False
        state.timer = ctx.sample(Domain.TIMER, ctx.config.idle_duration)
        creature.is_moving = False
        creature.is_flying = False
        ctx.ground()
        state.destination = creature.position
        angle = (ctx.rng.next_float(Domain.WANDER) - 0.5) * math.pi
        state.heading = normalize(Vector3(math.cos(angle), 0.0, math.sin(angle)))


class WalkingHandler(StateHandler):
    def enter(self, ctx: BehaviorContext, decision: Decision) -> None:
        state, creature = ctx.state, ctx.creature
        state.behavior = Behavior.WALKING
        state.landing = False
        state.timer = ctx.sample(Domain.TIMER, ctx.config.walk_duration)
        creature.is_moving = True
        creature.is_flying = False
        ctx.ground()
        ctx.aim_at(wander_destination(ctx, airborne=False))


class FlyingHandler(StateHandler):
    def enter(self, ctx: BehaviorContext, decision: Decision) -> None:
        state, creature, cfg = ctx.state, ctx.creature, ctx.config
        state.behavior = Behavior.FLYING
        state.landing = False
        bounds = cfg.fly_continue_duration if decision.resume else cfg.fly_duration
        state.timer = ctx.sample(Domain.TIMER, bounds)
        creature.is_moving = True
        creature.is_flying = True
        ctx.aim_at(wander_destination(ctx, airborne=True))


class SeekingTargetHandler(StateHandler):
    """Head for a noticed target: walk if it is close and on the ground, else fly."""

    def enter(self, ctx: BehaviorContext, decision: Decision) -> None:
        target = decision.target
        if target is None:
            STATE_HANDLERS[Behavior.WALKING].enter(ctx, Decision(Behavior.WALKING))
            return

        state, creature, cfg = ctx.state, ctx.creature, ctx.config
        state.behavior = Behavior.SEEKING_TARGET
        state.landing = False
        state.timer = cfg.seek_duration
        creature.is_moving = True
        creature.current_target_id = target.id

        on_ground = abs(target.position.y - cfg.min_height) < cfg.ground_tolerance + 1e-9
        close = planar_distance(creature.position, target.position) <= cfg.walk_approach_distance
        if on_ground and close:
            creature.is_flying = False
            ctx.ground()
            ctx.aim_at(target.position.with_y(cfg.min_height))
        else:
            creature.is_flying = True
            ctx.aim_at(target.position)


# =====================================================================
# Handler registry
# =====================================================================

STATE_HANDLERS: dict[Behavior, StateHandler] = {
    Behavior.IDLE: IdleHandler(),
    Behavior.WALKING: WalkingHandler(),
    Behavior.FLYING: FlyingHandler(),
    Behavior.SEEKING_TARGET: SeekingTargetHandler(),
}
