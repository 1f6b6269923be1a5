"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # Randomness (None = seeded from OS entropy)
    seed: int | None = None

    # Arena
    arena_width: float = 10.0
    min_height: float = 0.1
    max_height: float = 1.5

    # Motion
    walk_speed: float = 0.8
    fly_speed: float = 3.0
    turn_rate: float = 5.0
    steer_epsilon: float = 0.01
    arrival_radius: float = 0.1            # Destination counts as reached below this planar distance
    bob_amplitude: float = 0.05
    bob_frequency: float = 5.0             # rad/s of simulation clock

    # Perception
    detection_radius: float = 2.0
    perception_chance: float = 0.3         # Chance a search is even attempted
    interaction_radius: float = 0.3
    ground_interaction_mult: float = 1.5   # Wider contact radius while walking
    walk_approach_distance: float = 1.0    # Ground targets closer than this are walked to
    ground_tolerance: float = 0.05         # Height difference that still counts as "on the ground"

    # Targets
    target_height: float = 0.15
    spawn_margin: float = 0.5
    target_capacity: int = 8
    spawn_interval: float = 10.0

    # Behavior timers (seconds): (low, high)
    idle_duration: tuple[float, float] = (0.0, 2.0)
    walk_duration: tuple[float, float] = (2.0, 5.0)
    fly_duration: tuple[float, float] = (3.0, 7.0)
    fly_continue_duration: tuple[float, float] = (2.0, 5.0)
    seek_duration: float = 5.0
    wander_distance: tuple[float, float] = (1.0, 4.0)
    cruise_height: tuple[float, float] = (1.0, 2.0)  # Preferred flight altitude before the climb limit
    max_climb_ratio: float = 0.5           # Climb allowed per unit of planar distance

    # Clock
    stall_threshold: float = 1.0

    # Host
    tick_interval: float = 0.016
    broadcast_interval: float = 0.016
    event_log_size: int = 500

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.arena_width <= 0:
            raise ValueError(f"arena_width must be positive, got {self.arena_width}")
        if self.min_height > self.max_height:
            raise ValueError(
                f"min_height ({self.min_height}) exceeds max_height ({self.max_height})")
        if self.target_capacity < 1:
            raise ValueError(f"target_capacity must be >= 1, got {self.target_capacity}")
        if self.spawn_interval <= 0:
            raise ValueError(f"spawn_interval must be positive, got {self.spawn_interval}")
        if self.walk_speed <= 0 or self.fly_speed <= 0:
            raise ValueError("walk_speed and fly_speed must be positive")
        if self.spawn_margin >= self.arena_width:
            raise ValueError("spawn_margin must be smaller than arena_width")

    @property
    def half_width(self) -> float:
        return self.arena_width / 2
