"""Steering — turn toward a heading and move along it, bounded by the arena.

All methods are pure: they take the current kinematic state and return
the new one. Every step is scaled by elapsed time, so results do not
depend on how a span of time is split into ticks (the turn lerp is the
one exception, and it snaps once within ``steer_epsilon``).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from flysim.core.vectors import Vector3, clamp, normalize, planar_distance

if TYPE_CHECKING:
    from flysim.config import SimulationConfig


class Steering:
    """Kinematics for the fly, parameterized by the arena configuration."""

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    # ------------------------------------------------------------------
    # Heading
    # ------------------------------------------------------------------

    def steer_towards(
        self,
        current: Vector3,
        desired: Vector3,
        elapsed: float,
        turn_rate: float | None = None,
    ) -> Vector3:
        """Lerp the planar heading toward *desired* by ``turn_rate * elapsed``."""
        if turn_rate is None:
            turn_rate = self._config.turn_rate
        dx = desired.x - current.x
        dz = desired.z - current.z
        eps = self._config.steer_epsilon
        if abs(dx) < eps and abs(dz) < eps:
            return normalize(desired.planar())
        t = min(turn_rate * elapsed, 1.0)
        return normalize(Vector3(current.x + dx * t, 0.0, current.z + dz * t))

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def clamp_planar(self, position: Vector3) -> Vector3:
        half = self._config.half_width
        return Vector3(clamp(position.x, -half, half), position.y, clamp(position.z, -half, half))

    def clamp_height(self, position: Vector3) -> Vector3:
        return position.with_y(clamp(position.y, self._config.min_height, self._config.max_height))

    def walk(self, position: Vector3, facing: Vector3, speed: float, elapsed: float) -> Vector3:
        """Step along the planar *facing*; height pinned to the ground."""
        step = speed * elapsed
        heading = normalize(facing.planar())
        moved = Vector3(position.x + heading.x * step, self._config.min_height, position.z + heading.z * step)
        return self.clamp_planar(moved)

    def fly_towards(
        self,
        position: Vector3,
        destination: Vector3,
        speed: float,
        elapsed: float,
        bob: float = 0.0,
    ) -> Vector3:
        """Straight-line 3D step toward *destination*, never past it."""
        to_dest = destination - position
        distance = to_dest.length()
        moved = position
        if distance > 0:
            step = min(speed * elapsed, distance)
            moved = position + to_dest * (step / distance)
        moved = Vector3(moved.x, moved.y + bob, moved.z)
        return self.clamp_height(self.clamp_planar(moved))

    def bob_offset(self, clock_before: float, clock_after: float) -> float:
        """Vertical change of the idle-flight sine wave between two clock readings."""
        amp = self._config.bob_amplitude
        w = self._config.bob_frequency
        return amp * (math.sin(w * clock_after) - math.sin(w * clock_before))

    # ------------------------------------------------------------------
    # Contact
    # ------------------------------------------------------------------

    @staticmethod
    def touches(position: Vector3, target: Vector3, radius: float) -> bool:
        """Cylinder test: planar and vertical separation both under *radius*."""
        return planar_distance(position, target) < radius and abs(position.y - target.y) < radius

    def sweep_contact(self, start: Vector3, end: Vector3, target: Vector3, radius: float) -> Vector3 | None:
        """First point along start→end that touches *target*, or None.

        Checks the planar closest approach before the end point, so a
        long step that passes through the target stops on it instead of
        tunneling beyond.
        """
        seg = end - start
        seg_len_sq = seg.x * seg.x + seg.z * seg.z
        candidates: list[Vector3] = []
        if seg_len_sq > 0:
            t = ((target.x - start.x) * seg.x + (target.z - start.z) * seg.z) / seg_len_sq
            t = clamp(t, 0.0, 1.0)
            candidates.append(start + seg * t)
        candidates.append(end)
        for point in candidates:
            if self.touches(point, target, radius):
                return point
        return None
