from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ppmtrace.math_utils import dot_batch, normalize_batch, square
from ppmtrace.ray import Ray
from ppmtrace.vector import Color

if TYPE_CHECKING:
    from ppmtrace.backend import ArrayModule
    from ppmtrace.ray import Intersection
    from ppmtrace.scene import Scene
    from ppmtrace.vector import Vector3


class RayCaster:
    """Primary-ray caster picking the closest hit across a scene."""

    def __init__(self, scene: Scene, falloff_distance: float | None = None) -> None:
        """Initialise the caster.

        falloff_distance:
            Distance from the light reference point to the eye. When given,
            hit colors are scaled by ``falloff_distance**2 / hit_distance**2``.
        """
        self.scene = scene
        self.falloff_distance = falloff_distance

    def closest_hit(self, ray: Ray) -> Intersection | None:
        """Return the hit whose point is nearest the ray origin, if any."""
        best: Intersection | None = None
        best_distance = float("inf")
        for obj in self.scene:
            found = obj.intersect(ray)
            if not found.hit:
                continue
            distance = found.distance_from(ray.origin)
            if distance < best_distance:
                best = found
                best_distance = distance
        return best

    def shoot_ray(self, from_: Vector3, to: Vector3) -> Color:
        ray = Ray.towards(from_, to)
        best = self.closest_hit(ray)
        if best is None or best.color is None or best.point is None:
            return Color.black()

        if self.falloff_distance is None:
            return best.color

        distance = (best.point - from_).length()
        if distance == 0.0:
            return best.color
        return best.color * (square(self.falloff_distance) / square(distance))


class ImageCaster:
    """Vectorized caster evaluating a whole grid of targets at once."""

    def __init__(self, xp: ArrayModule, scene: Scene, falloff_distance: float | None = None) -> None:
        """Initialise the caster."""
        for obj in scene:
            if not hasattr(obj, "intersect_batch"):
                msg = f"{type(obj).__name__} does not support batched intersection"
                raise TypeError(msg)
        self.xp = xp
        self.scene = scene
        self.falloff_distance = falloff_distance

    def cast(self, origin: Any, targets: Any) -> Any:
        """Cast.

        origin: (3,)
        targets: (H,W,3)
        returns: (H,W,3) colors
        """
        xp = self.xp

        ro = xp.asarray(origin, dtype=xp.float64)
        rd = normalize_batch(xp, xp.asarray(targets, dtype=xp.float64) - ro)
        light = xp.ones(3, dtype=xp.float64)

        shape = rd.shape[:-1]
        best_distance = xp.full(shape, xp.inf, dtype=xp.float64)
        best_color = xp.zeros(rd.shape, dtype=xp.float64)

        for obj in self.scene:
            res = obj.intersect_batch(xp, ro, rd, light)
            offset = res.point - ro
            distance = xp.sqrt(dot_batch(offset, offset))
            closer = res.hit & (distance < best_distance)
            best_distance = xp.where(closer, distance, best_distance)
            best_color = xp.where(closer[..., None], res.color, best_color)

        if self.falloff_distance is None:
            return best_color

        hit = xp.isfinite(best_distance) & (best_distance > 0.0)
        d2 = xp.where(hit, best_distance * best_distance, 1.0)
        scale = xp.where(hit, square(self.falloff_distance) / d2, 1.0)
        return best_color * scale[..., None]
