from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ppmtrace.backend import ArrayModule
    from ppmtrace.ray import BatchIntersection, Intersection, Ray


class Intersectable(Protocol):
    """Pure ray intersection contract."""

    def intersect(self, ray: Ray) -> Intersection:
        """Intersection outcome of a single ray against this object."""
        ...


class BatchIntersectable(Protocol):
    """Vectorized twin of Intersectable for whole ray grids."""

    def intersect_batch(self, xp: ArrayModule, origin: Any, directions: Any, light: Any) -> BatchIntersection:
        """Intersect (..., 3) unit directions sharing one (3,) origin."""
        ...
