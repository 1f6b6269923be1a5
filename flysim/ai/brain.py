"""FlyBrain — per-tick behavior driver.

Each tick:
  1. Consistency: a creature flagged airborne but not moving, or not
     moving outside Idle, is forced through a re-decision.
  2. Pre-move contact: every target already within reach is consumed.
  3. Steer: turn the facing toward the destination.
  4. Move: fly or walk, then sweep the step against every target. Targets
     met along the way are consumed; meeting the current target stops the
     creature on the contact point.
  5. Arrival: reaching the destination ends the leg (or, for a landing
     flight, touches down into Idle).

Consuming the current target triggers a re-decision with ``reached=True``.
Opportunistic contact with any other target only removes it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from flysim.ai.perception import Perception
from flysim.ai.states import STATE_HANDLERS, BehaviorContext, Decision, IdleHandler, transition
from flysim.core.enums import Behavior, Domain, EventCategory
from flysim.core.vectors import direction_to, planar_distance

if TYPE_CHECKING:
    from flysim.ai.steering import Steering
    from flysim.config import SimulationConfig
    from flysim.core.models import Target
    from flysim.core.vectors import Vector3
    from flysim.core.world_state import WorldState
    from flysim.systems.rng import RandomSource

logger = logging.getLogger(__name__)

EventSink = Callable[[EventCategory, str, tuple[int, ...]], None]


def _discard(category: EventCategory, message: str, target_ids: tuple[int, ...]) -> None:
    return None


class FlyBrain:
    """Runs the behavior state machine and steering for the single creature."""

    __slots__ = ("_config", "_rng", "_steering", "_emit")

    def __init__(
        self,
        config: SimulationConfig,
        rng: RandomSource,
        steering: Steering,
        emit: EventSink | None = None,
    ) -> None:
        self._config = config
        self._rng = rng
        self._steering = steering
        self._emit = emit or _discard

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def decide(self, world: WorldState, *, reached: bool = False) -> None:
        """Re-decide the behavior from one fresh draw."""
        creature, state = world.creature, world.behavior

        if creature.is_flying and not creature.is_moving:
            self.enter(world, Decision(Behavior.FLYING))
            return

        draw = self._rng.next_float(Domain.BEHAVIOR)
        decision = transition(
            state.behavior,
            draw,
            reached=reached,
            expired=state.expired,
            locate=lambda: Perception.nearby_target(creature, world.targets, self._config, self._rng),
        )
        if decision.behavior is None:
            return
        self.enter(world, decision)

    def enter(self, world: WorldState, decision: Decision) -> None:
        """Enter ``decision.behavior`` through its handler."""
        previous = world.behavior.behavior
        ctx = self._context(world)
        STATE_HANDLERS[decision.behavior].enter(ctx, decision)

        current = world.behavior.behavior
        if current != previous:
            logger.debug("Tick %d: %s → %s", world.tick, previous.name, current.name)
            ids = (world.creature.current_target_id,) if current == Behavior.SEEKING_TARGET else ()
            self._emit(EventCategory.BEHAVIOR, f"{previous.name} → {current.name}", ids)
        elif world.behavior.landing:
            logger.debug("Tick %d: landing toward %s", world.tick, world.behavior.destination)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, world: WorldState, elapsed: float) -> None:
        creature, state, cfg = world.creature, world.behavior, self._config
        steering = self._steering

        if (creature.is_flying and not creature.is_moving) or (
            not creature.is_moving and state.behavior != Behavior.IDLE
        ):
            self.decide(world)
            return

        radius = Perception.interaction_radius(creature, cfg)
        current = Perception.resolve_target(creature, world.targets)

        touching = [t for t in world.targets if steering.touches(creature.position, t.position, radius)]
        if touching:
            for target in touching:
                self._consume(world, target)
            if current is not None and current in touching:
                self.decide(world, reached=True)
                return

        if not creature.is_moving:
            creature.facing = steering.steer_towards(creature.facing, state.heading, elapsed)
            return

        if planar_distance(creature.position, state.destination) > 1e-9:
            state.heading = direction_to(creature.position, state.destination)
        creature.facing = steering.steer_towards(creature.facing, state.heading, elapsed)

        start = creature.position
        if creature.is_flying:
            bob = 0.0
            if state.behavior != Behavior.SEEKING_TARGET:
                bob = steering.bob_offset(world.clock, world.clock + elapsed)
            end = steering.fly_towards(start, state.destination, cfg.fly_speed, elapsed, bob)
        else:
            end = steering.walk(start, creature.facing, cfg.walk_speed, elapsed)

        contacts = self._contacts_along(world, start, end, radius)
        if current is not None:
            hit = next(((d, p) for t, d, p in contacts if t.id == current.id), None)
            if hit is not None:
                # Stop on the intended target; anything met on the way is eaten too
                reach, point = hit
                for target, d, _ in contacts:
                    if d <= reach:
                        self._consume(world, target)
                creature.position = point
                self.decide(world, reached=True)
                return
        for target, _, _ in contacts:
            self._consume(world, target)

        creature.position = end

        if planar_distance(end, state.destination) < cfg.arrival_radius:
            if state.landing:
                self._touch_down(world)
                return
            state.timer = 0.0
            self.decide(world)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _contacts_along(
        self, world: WorldState, start: Vector3, end: Vector3, radius: float,
    ) -> list[tuple[Target, float, Vector3]]:
        """Targets met on start→end as (target, distance from start, contact point), nearest first."""
        hits: list[tuple[Target, float, Vector3]] = []
        for target in world.targets:
            point = self._steering.sweep_contact(start, end, target.position, radius)
            if point is not None:
                hits.append((target, (point - start).length(), point))
        hits.sort(key=lambda hit: hit[1])
        return hits

    def _touch_down(self, world: WorldState) -> None:
        """End the landing leg of a flight by settling into Idle."""
        previous = world.behavior.behavior
        IdleHandler.settle(self._context(world))
        logger.debug("Tick %d: touched down at %s", world.tick, world.creature.position)
        self._emit(EventCategory.BEHAVIOR, f"{previous.name} → {Behavior.IDLE.name}", ())

    def _consume(self, world: WorldState, target: Target) -> None:
        world.targets.remove(target.id)
        if world.creature.current_target_id == target.id:
            world.creature.current_target_id = None
        logger.debug("Tick %d: consumed target #%d at %s", world.tick, target.id, target.position)
        self._emit(EventCategory.CONSUME, f"Target #{target.id} consumed", (target.id,))

    def _context(self, world: WorldState) -> BehaviorContext:
        return BehaviorContext(
            creature=world.creature,
            state=world.behavior,
            config=self._config,
            rng=self._rng,
        )
