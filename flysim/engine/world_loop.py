"""WorldLoop — the engine facade driven by elapsed wall-clock time.

Each ``advance`` call:
  1. Clock — count the behavior timer down; a stall (gap above
     ``stall_threshold``) zeroes the timer and discards the gap for motion.
  2. Spawning — the target registry advances its own spawn clock.
  3. Decision — an expired timer triggers a re-decision.
  4. Motion — the brain steers, moves, and resolves contacts.
  5. Publish — tick/clock advance and an immutable snapshot is taken.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flysim.ai.brain import FlyBrain
from flysim.ai.steering import Steering
from flysim.core.enums import EventCategory
from flysim.core.snapshot import Snapshot
from flysim.core.targets import TargetRegistry
from flysim.core.vectors import Vector3
from flysim.core.world_state import WorldState
from flysim.systems.generator import TargetGenerator
from flysim.systems.rng import DomainRNG
from flysim.utils.event_log import SimEvent

if TYPE_CHECKING:
    from flysim.config import SimulationConfig
    from flysim.systems.rng import RandomSource

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of the simulation.

    Owns the world exclusively. Not thread-safe: the host must funnel all
    ``advance`` and ``snapshot`` calls through one thread (or one lock).
    """

    __slots__ = (
        "_config",
        "_rng",
        "_world",
        "_steering",
        "_brain",
        "_snapshot",
        "_tick_events",
    )

    def __init__(self, config: SimulationConfig, rng: RandomSource | None = None) -> None:
        self._config = config
        self._rng = rng if rng is not None else DomainRNG(config.seed)
        self._tick_events: list[SimEvent] = []

        registry = TargetRegistry(config, TargetGenerator(config, self._rng))
        self._world = WorldState(registry, spawn=Vector3(0.0, config.min_height, 0.0))
        self._steering = Steering(config)
        self._brain = FlyBrain(config, self._rng, self._steering, emit=self._emit)

        first = registry.seed_initial()
        self._emit(EventCategory.SPAWN, f"Target #{first.id} spawned", (first.id,))
        self._brain.decide(self._world)
        self._snapshot = Snapshot.from_world(self._world)

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def brain(self) -> FlyBrain:
        return self._brain

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent ``advance`` (or construction)."""
        return self._tick_events

    def snapshot(self) -> Snapshot:
        """Immutable view of the world as of the end of the last tick."""
        return self._snapshot

    def advance(self, elapsed: float) -> None:
        """Advance the simulation by *elapsed* seconds of wall-clock time."""
        self._tick_events = []
        world = self._world
        state = world.behavior
        elapsed = max(elapsed, 0.0)

        motion_dt = elapsed
        if elapsed > self._config.stall_threshold:
            logger.warning("Tick %d: %.2fs stall, forcing re-decision", world.tick, elapsed)
            self._emit(EventCategory.STALL, f"Stall of {elapsed:.2f}s")
            state.timer = 0.0
            motion_dt = 0.0
        elif state.timer is not None:
            state.timer -= elapsed

        for target in world.targets.tick(elapsed):
            self._emit(EventCategory.SPAWN, f"Target #{target.id} spawned", (target.id,))

        if state.expired:
            self._brain.decide(world)

        self._brain.update(world, motion_dt)

        world.clock += motion_dt
        world.tick += 1
        self._snapshot = Snapshot.from_world(world)

    def run(self, duration: float, dt: float) -> None:
        """Advance in fixed *dt* steps for *duration* simulated seconds."""
        steps = int(round(duration / dt))
        logger.info("=== Simulation started (%d steps of %.3fs) ===", steps, dt)
        for i in range(1, steps + 1):
            self.advance(dt)
            if i % max(int(round(1.0 / dt)), 1) == 0:
                snap = self._snapshot
                logger.info(
                    "t=%.1fs %-14s at %s, %d target(s)",
                    snap.clock, snap.behavior.name, snap.creature.position, len(snap.targets),
                )
        logger.info("=== Simulation finished at tick %d ===", self._world.tick)

    def _emit(self, category: EventCategory, message: str, target_ids: tuple[int, ...] = ()) -> None:
        self._tick_events.append(SimEvent(
            tick=self._world.tick,
            category=category.name.lower(),
            message=message,
            target_ids=target_ids,
        ))
