"""3D vector math for positions and headings.

All functions are pure. Headings are kept planar (y = 0) by the callers;
``normalize`` itself works on full 3D vectors.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable 3D float vector, used for both positions and directions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def planar(self) -> Vector3:
        """Copy with y dropped to 0."""
        return Vector3(self.x, 0.0, self.z)

    def with_y(self, y: float) -> Vector3:
        return Vector3(self.x, y, self.z)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def __repr__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


FORWARD = Vector3(0.0, 0.0, 1.0)


def normalize(v: Vector3) -> Vector3:
    """Return *v* scaled to unit length; the zero vector maps to ``FORWARD``."""
    length = v.length()
    if length == 0:
        return FORWARD
    return Vector3(v.x / length, v.y / length, v.z / length)


def direction_to(origin: Vector3, target: Vector3) -> Vector3:
    """Normalized planar heading from *origin* to *target*."""
    return normalize(Vector3(target.x - origin.x, 0.0, target.z - origin.z))


def planar_distance(a: Vector3, b: Vector3) -> float:
    dx = a.x - b.x
    dz = a.z - b.z
    return math.sqrt(dx * dx + dz * dz)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
