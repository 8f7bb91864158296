from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from ppmtrace.backend import BackendName
from ppmtrace.vector import Vector3

RenderMethod = Literal["scalar", "vectorized"]


def _pixel_count(extent: float, resolution: int) -> int:
    """Number of integer indices in [0, extent * resolution)."""
    # Rounding first keeps float noise such as 0.29 * 100 from adding a pixel.
    return math.ceil(round(extent * resolution, 9))


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Viewport sampling and post-processing settings.

    The output grid has one pixel per integer index in
    ``[0, height * resolution) x [0, width * resolution)``, covering
    ``[-width/2, width/2) x [-height/2, height/2)`` on the ``z = 0`` plane,
    viewed from ``eye``.
    """

    resolution: int = 10
    width: float = 100.0
    height: float = 100.0
    eye: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, -200.0))
    falloff_reference: Vector3 = field(default_factory=Vector3)
    normalize: bool = True
    depth_falloff: bool = True
    method: RenderMethod = "vectorized"
    backend: BackendName = "numpy"
    progress: bool = False
    band_rows: int = 128

    def __post_init__(self) -> None:
        if self.resolution <= 0:
            msg = f"resolution must be positive, got {self.resolution!r}"
            raise ValueError(msg)
        if self.width <= 0 or self.height <= 0:
            msg = f"Viewport extents must be positive, got {self.width!r}x{self.height!r}"
            raise ValueError(msg)
        if self.band_rows <= 0:
            msg = f"band_rows must be positive, got {self.band_rows!r}"
            raise ValueError(msg)
        if self.method not in ("scalar", "vectorized"):
            msg = f"Unknown render method: {self.method!r}"
            raise ValueError(msg)
        if self.backend not in ("auto", "numpy", "cupy"):
            msg = f"Unknown array backend: {self.backend!r}"
            raise ValueError(msg)

    @property
    def rows(self) -> int:
        return _pixel_count(self.height, self.resolution)

    @property
    def cols(self) -> int:
        return _pixel_count(self.width, self.resolution)

    def falloff_distance(self) -> float | None:
        """Reference-to-eye distance used for inverse-square falloff."""
        if not self.depth_falloff:
            return None
        return (self.falloff_reference - self.eye).length()
