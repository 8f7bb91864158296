from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ppmtrace.math_utils import dot_batch, normalize_batch, square
from ppmtrace.protocols import BatchIntersectable, Intersectable
from ppmtrace.ray import BatchIntersection, Intersection

if TYPE_CHECKING:
    from ppmtrace.backend import ArrayModule
    from ppmtrace.ray import Ray
    from ppmtrace.vector import Color, Vector3


@dataclass(frozen=True, slots=True)
class Sphere(Intersectable, BatchIntersectable):
    """Diffuse sphere lit head-on by the incoming ray."""

    center: Vector3
    radius: float
    color: Color

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            msg = f"Sphere radius must be positive, got {self.radius!r}"
            raise ValueError(msg)

    def intersect(self, ray: Ray) -> Intersection:
        c = self.center
        s = ray.origin
        d = ray.direction

        v = s - c
        vd = v.dot(d)
        det = square(vd) - (v.dot(v) - square(self.radius))
        if det < 0.0:
            return Intersection.miss()

        dets = math.sqrt(det)
        z = -vd
        # Nearer root, even when it lies behind the ray origin.
        t = min(z + dets, z - dets)

        y = s + d * t
        n = (y - c).unit()
        cos_theta = abs(n.dot(d))

        return Intersection.at(y, self.color * ray.light * cos_theta)

    def intersect_batch(self, xp: ArrayModule, origin: Any, directions: Any, light: Any) -> BatchIntersection:
        """Intersect a grid of rays.

        origin: (3,)
        directions: (..., 3) unit vectors
        light: (3,) or (..., 3)
        """
        c = xp.asarray(self.center.as_tuple(), dtype=xp.float64)
        col = xp.asarray(self.color.as_tuple(), dtype=xp.float64)
        s = xp.asarray(origin, dtype=xp.float64)

        v = s - c
        vd = dot_batch(v[None, :], directions)
        det = vd * vd - (float(dot_batch(v, v)) - square(self.radius))
        hit = det >= 0.0

        dets = xp.sqrt(xp.where(hit, det, 0.0))
        z = -vd
        t = xp.minimum(z + dets, z - dets)

        y = s + directions * t[..., None]
        offset = y - c
        # Normals only matter where hit; keep misses finite for normalize_batch.
        offset = xp.where(hit[..., None], offset, xp.asarray([1.0, 0.0, 0.0], dtype=xp.float64))
        n = normalize_batch(xp, offset)
        cos_theta = xp.abs(dot_batch(n, directions))

        shaded = cos_theta[..., None] * col * light
        shaded = xp.where(hit[..., None], shaded, 0.0)
        return BatchIntersection(hit=hit, point=y, color=shaded)
