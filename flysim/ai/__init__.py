"""AI layer: perception, steering, and the behavior state machine."""

from flysim.ai.brain import FlyBrain
from flysim.ai.perception import Perception
from flysim.ai.steering import Steering

__all__ = ["FlyBrain", "Perception", "Steering"]
