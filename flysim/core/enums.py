"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Behavior(IntEnum):
    """Finite-state-machine states for the fly."""

    IDLE = 0
    WALKING = 1
    FLYING = 2
    SEEKING_TARGET = 3


@unique
class Domain(IntEnum):
    """RNG domain separation keys — each consumer draws from its own stream."""

    BEHAVIOR = 0      # Transition draws
    TIMER = 1         # Behavior durations
    WANDER = 2        # Random destinations and headings
    PERCEPTION = 3    # Whether a target search is attempted
    SPAWN = 4         # Target placement


@unique
class EventCategory(IntEnum):
    SPAWN = 0
    CONSUME = 1
    BEHAVIOR = 2
    STALL = 3
