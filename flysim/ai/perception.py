"""Perception — what the fly notices.

Detection is deliberately unreliable: a search is only attempted with
``perception_chance`` probability, and then only targets within the
detection radius (planar) are candidates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flysim.core.enums import Domain

if TYPE_CHECKING:
    from flysim.config import SimulationConfig
    from flysim.core.models import Creature, Target
    from flysim.core.targets import TargetRegistry
    from flysim.systems.rng import RandomSource


class Perception:
    """Stateless perception utilities."""

    __slots__ = ()

    @staticmethod
    def nearby_target(
        creature: Creature,
        registry: TargetRegistry,
        config: SimulationConfig,
        rng: RandomSource,
    ) -> Target | None:
        """Return the nearest detectable target, or None if the search fails or is skipped."""
        if len(registry) == 0:
            return None
        if rng.next_float(Domain.PERCEPTION) >= config.perception_chance:
            return None
        return registry.nearest_within(creature.position, config.detection_radius)

    @staticmethod
    def resolve_target(creature: Creature, registry: TargetRegistry) -> Target | None:
        """Resolve ``current_target_id``; a dangling id is cleared."""
        if creature.current_target_id is None:
            return None
        target = registry.find(creature.current_target_id)
        if target is None:
            creature.current_target_id = None
        return target

    @staticmethod
    def interaction_radius(creature: Creature, config: SimulationConfig) -> float:
        if creature.is_flying:
            return config.interaction_radius
        return config.interaction_radius * config.ground_interaction_mult
