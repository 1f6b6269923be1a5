"""Core data models and world representation."""

from flysim.core.enums import Behavior, Domain, EventCategory
from flysim.core.models import BehaviorState, Creature, Target
from flysim.core.snapshot import Snapshot
from flysim.core.targets import TargetRegistry
from flysim.core.vectors import FORWARD, Vector3, direction_to, normalize
from flysim.core.world_state import WorldState

__all__ = [
    "Behavior",
    "BehaviorState",
    "Creature",
    "Domain",
    "EventCategory",
    "FORWARD",
    "Snapshot",
    "Target",
    "TargetRegistry",
    "Vector3",
    "WorldState",
    "direction_to",
    "normalize",
]
