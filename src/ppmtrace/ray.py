from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ppmtrace.vector import Color, Vector3


@dataclass(frozen=True, slots=True)
class Ray:
    """Half-line with unit direction carrying an incoming light multiplier."""

    origin: Vector3
    direction: Vector3
    light: Color = field(default_factory=Color.white)

    def at(self, t: float) -> Vector3:
        return self.origin + self.direction * t

    @classmethod
    def towards(cls, origin: Vector3, target: Vector3, light: Color | None = None) -> Ray:
        """Define ray by a world-space target point.

        Raises DegenerateVectorError when target equals origin.
        """
        direction = (target - origin).unit()
        return cls(origin=origin, direction=direction, light=Color.white() if light is None else light)


@dataclass(frozen=True, slots=True)
class Intersection:
    """Tagged intersection outcome: a miss, or a hit point with its shaded color."""

    hit: bool
    point: Vector3 | None = None
    color: Color | None = None

    @classmethod
    def miss(cls) -> Intersection:
        return cls(hit=False)

    @classmethod
    def at(cls, point: Vector3, color: Color) -> Intersection:
        return cls(hit=True, point=point, color=color)

    def distance_from(self, origin: Vector3) -> float:
        if not self.hit or self.point is None:
            return float("inf")
        return (self.point - origin).length()


@dataclass(frozen=True, slots=True)
class BatchIntersection:
    """Per-ray intersection outcomes for a grid of rays.

    hit: (...) bool
    point: (..., 3) hit points, undefined where hit is False
    color: (..., 3) shaded colors, zero where hit is False
    """

    hit: Any
    point: Any
    color: Any
