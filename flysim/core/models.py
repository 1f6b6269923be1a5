"""Core data models: Target, Creature, BehaviorState."""

from __future__ import annotations

from dataclasses import dataclass, field

from flysim.core.enums import Behavior
from flysim.core.vectors import FORWARD, Vector3


@dataclass(frozen=True, slots=True)
class Target:
    """A collectible point of interest. Immutable once spawned."""

    id: int
    position: Vector3


@dataclass(slots=True)
class Creature:
    """Mutable state of the fly.

    ``current_target_id`` is a plain id, never a Target reference: the
    registry may drop the target at any time, so every read must go
    through ``TargetRegistry.find``.
    """

    position: Vector3 = field(default_factory=Vector3)
    facing: Vector3 = FORWARD
    is_moving: bool = False
    is_flying: bool = False
    current_target_id: int | None = None

    def copy(self) -> Creature:
        return Creature(
            position=self.position,
            facing=self.facing,
            is_moving=self.is_moving,
            is_flying=self.is_flying,
            current_target_id=self.current_target_id,
        )


@dataclass(slots=True)
class BehaviorState:
    """The active behavior plus the data its variant carries.

    timer:       seconds until the next re-decision; ``None`` while landing
                 (the re-decision waits for touchdown).
    destination: point the steering is heading for.
    heading:     desired facing the steering turns toward.
    landing:     Idle entered mid-air; descending to ``destination``.
    """

    behavior: Behavior = Behavior.IDLE
    timer: float | None = 0.0
    destination: Vector3 = field(default_factory=Vector3)
    heading: Vector3 = FORWARD
    landing: bool = False

    @property
    def expired(self) -> bool:
        return self.timer is not None and self.timer <= 0
