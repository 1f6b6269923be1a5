"""Mutable authoritative world state — only mutated by the WorldLoop."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flysim.core.models import BehaviorState, Creature
from flysim.core.vectors import FORWARD, Vector3

if TYPE_CHECKING:
    from flysim.core.targets import TargetRegistry


class WorldState:
    """The single source of truth: one creature, its behavior, and the targets."""

    __slots__ = ("tick", "clock", "creature", "behavior", "targets")

    def __init__(self, targets: TargetRegistry, spawn: Vector3) -> None:
        self.tick: int = 0
        self.clock: float = 0.0
        self.creature: Creature = Creature(position=spawn, facing=FORWARD)
        self.behavior: BehaviorState = BehaviorState(destination=spawn)
        self.targets: TargetRegistry = targets
