"""Engine systems: RNG and target generation."""

from flysim.systems.rng import DomainRNG, RandomSource
from flysim.systems.generator import TargetGenerator

__all__ = ["DomainRNG", "RandomSource", "TargetGenerator"]
