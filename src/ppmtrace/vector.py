from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from ppmtrace.exceptions import DegenerateVectorError


@dataclass(frozen=True, slots=True)
class Vector3:
    """Point or direction in world space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, k: float) -> Vector3:
        return Vector3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.squared())

    def unit(self) -> Vector3:
        """Return the direction scaled to length 1.

        Raises
        ------
        DegenerateVectorError
            If the vector has zero length.

        """
        n = self.length()
        if n == 0.0:
            msg = "Cannot normalize a zero-length vector"
            raise DegenerateVectorError(msg)
        return Vector3(self.x / n, self.y / n, self.z / n)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def of(cls, v: Any) -> Vector3:
        """Build from any 3-sequence (tuple, list, 1D array)."""
        x, y, z = v
        return cls(float(x), float(y), float(z))


@dataclass(frozen=True, slots=True)
class Color:
    """RGB triple; unbounded while shading, mapped to bytes only on export."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    @classmethod
    def of(cls, c: Any) -> Color:
        r, g, b = c
        return cls(float(r), float(g), float(b))

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)
