"""Target generator — picks spawn positions inside the arena."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flysim.core.enums import Domain
from flysim.core.vectors import Vector3

if TYPE_CHECKING:
    from flysim.config import SimulationConfig
    from flysim.systems.rng import RandomSource


class TargetGenerator:
    """Samples uniform target positions on the ground, inset by the spawn margin."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: SimulationConfig, rng: RandomSource) -> None:
        self._config = config
        self._rng = rng

    def sample_position(self) -> Vector3:
        span = self._config.arena_width - self._config.spawn_margin
        x = (self._rng.next_float(Domain.SPAWN) - 0.5) * span
        z = (self._rng.next_float(Domain.SPAWN) - 0.5) * span
        return Vector3(x, self._config.target_height, z)
