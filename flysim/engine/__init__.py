"""Engine layer: the tick-driven world loop."""

from flysim.engine.world_loop import WorldLoop

__all__ = ["WorldLoop"]
