"""Immutable snapshot of the world state for readers outside the engine."""

from __future__ import annotations

from dataclasses import dataclass

from flysim.core.enums import Behavior
from flysim.core.models import Creature, Target
from flysim.core.world_state import WorldState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the world taken at the end of a tick.

    The creature is copied and targets are already immutable, so the
    snapshot stays valid while the engine keeps ticking.
    """

    tick: int
    clock: float
    behavior: Behavior
    creature: Creature
    targets: tuple[Target, ...]

    @classmethod
    def from_world(cls, world: WorldState) -> Snapshot:
        return cls(
            tick=world.tick,
            clock=world.clock,
            behavior=world.behavior.behavior,
            creature=world.creature.copy(),
            targets=tuple(world.targets),
        )

    def find_target(self, target_id: int) -> Target | None:
        for target in self.targets:
            if target.id == target_id:
                return target
        return None
