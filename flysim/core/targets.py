"""TargetRegistry — sole owner of the active targets.

Population control runs on its own clock: ``tick`` accumulates elapsed
time and spawns at most one target per ``spawn_interval`` while below
capacity. This is deliberately separate from the behavior timer, which
runs at frame granularity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from flysim.core.models import Target
from flysim.core.vectors import Vector3, planar_distance

if TYPE_CHECKING:
    from flysim.config import SimulationConfig
    from flysim.systems.generator import TargetGenerator

logger = logging.getLogger(__name__)


class TargetRegistry:
    """Ordered collection of targets keyed by id.

    Ids start at 1 and are never reused, so a stale id held by the
    creature can never resolve to a newer target.
    """

    __slots__ = ("_config", "_generator", "_targets", "_next_id", "_spawn_clock")

    def __init__(self, config: SimulationConfig, generator: TargetGenerator) -> None:
        self._config = config
        self._generator = generator
        self._targets: dict[int, Target] = {}
        self._next_id: int = 1
        self._spawn_clock: float = 0.0

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        # dicts keep insertion order, which is spawn order
        return iter(self._targets.values())

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._targets

    @property
    def full(self) -> bool:
        return len(self._targets) >= self._config.target_capacity

    def seed_initial(self) -> Target:
        """Spawn the single target that exists before the spawn clock starts."""
        return self.spawn()

    def spawn(self) -> Target:
        """Create a target at a random position with the next id."""
        target = Target(id=self._next_id, position=self._generator.sample_position())
        self._next_id += 1
        self._targets[target.id] = target
        logger.debug("Spawned target #%d at %s", target.id, target.position)
        return target

    def tick(self, elapsed: float) -> list[Target]:
        """Advance the spawn clock; return the targets spawned by this call."""
        self._spawn_clock += max(elapsed, 0.0)
        spawned: list[Target] = []
        interval = self._config.spawn_interval
        while self._spawn_clock >= interval:
            self._spawn_clock -= interval
            if not self.full:
                spawned.append(self.spawn())
        return spawned

    def find(self, target_id: int | None) -> Target | None:
        if target_id is None:
            return None
        return self._targets.get(target_id)

    def remove(self, target_id: int) -> Target | None:
        """Remove and return the target; a missing id is a no-op."""
        target = self._targets.pop(target_id, None)
        if target is not None:
            logger.debug("Removed target #%d", target_id)
        return target

    def nearest_within(self, position: Vector3, radius: float) -> Target | None:
        """Closest target by planar distance strictly inside *radius*, tie-broken by lowest id."""
        best: Target | None = None
        best_dist = radius
        for target in self._targets.values():
            d = planar_distance(position, target.position)
            if d < best_dist:
                best = target
                best_dist = d
        return best
