from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tqdm import tqdm

from ppmtrace.backend import get_array_module, to_numpy
from ppmtrace.caster import ImageCaster, RayCaster
from ppmtrace.image import ImageBuffer
from ppmtrace.render.config import RenderConfig
from ppmtrace.vector import Vector3

if TYPE_CHECKING:
    import os

    from ppmtrace.scene import Scene

logger = logging.getLogger(__name__)


class Renderer:
    """Maps the output pixel grid onto the z = 0 viewport and casts one ray per pixel."""

    def __init__(self, scene: Scene, config: RenderConfig | None = None) -> None:
        """Initialise the renderer."""
        self.scene = scene
        self.cfg = RenderConfig() if config is None else config
        self.xp = get_array_module(self.cfg.backend)

    def screen_point(self, row: int, col: int) -> Vector3:
        """World-space target of pixel (row, col)."""
        cfg = self.cfg
        x = col / cfg.resolution - cfg.width / 2
        y = row / cfg.resolution - cfg.height / 2
        return Vector3(x, y, 0.0)

    def screen_grid(self, row_start: int = 0, row_stop: int | None = None) -> Any:
        """Return targets of shape (rows, cols, 3) for rows [row_start, row_stop)."""
        xp = self.xp
        cfg = self.cfg
        stop = cfg.rows if row_stop is None else row_stop

        xs = xp.arange(cfg.cols, dtype=xp.float64) / cfg.resolution - cfg.width / 2
        ys = xp.arange(row_start, stop, dtype=xp.float64) / cfg.resolution - cfg.height / 2

        grid = xp.zeros((stop - row_start, cfg.cols, 3), dtype=xp.float64)
        grid[..., 0] = xs[None, :]
        grid[..., 1] = ys[:, None]
        return grid

    def _render_scalar(self, image: ImageBuffer) -> None:
        cfg = self.cfg
        caster = RayCaster(self.scene, falloff_distance=cfg.falloff_distance())
        rows = tqdm(range(cfg.rows), total=cfg.rows, desc="Rendering rows", disable=not cfg.progress)
        for r in rows:
            for c in range(cfg.cols):
                image.set(r, c, caster.shoot_ray(cfg.eye, self.screen_point(r, c)))

    def _render_vectorized(self, image: ImageBuffer) -> None:
        cfg = self.cfg
        xp = self.xp
        caster = ImageCaster(xp, self.scene, falloff_distance=cfg.falloff_distance())
        eye = xp.asarray(cfg.eye.as_tuple(), dtype=xp.float64)

        starts = range(0, cfg.rows, cfg.band_rows)
        bands = tqdm(starts, total=len(starts), desc="Rendering bands", disable=not cfg.progress)
        for start in bands:
            stop = min(start + cfg.band_rows, cfg.rows)
            colors = caster.cast(eye, self.screen_grid(start, stop))
            image.put_rows(start, to_numpy(xp, colors))

    def render(self) -> ImageBuffer:
        """Render the scene; normalizes when the config asks for it."""
        cfg = self.cfg
        logger.info(
            "Rendering %d objects to %dx%d pixels (%s, falloff=%s)",
            len(self.scene), cfg.cols, cfg.rows, cfg.method, cfg.depth_falloff,
        )
        image = ImageBuffer(cfg.rows, cfg.cols)
        if cfg.method == "scalar":
            self._render_scalar(image)
        else:
            self._render_vectorized(image)

        if cfg.normalize:
            image.normalize()
        return image


def render(scene: Scene, config: RenderConfig | None = None) -> ImageBuffer:
    return Renderer(scene, config).render()


def render_to_file(scene: Scene, path: str | os.PathLike[str], config: RenderConfig | None = None) -> ImageBuffer:
    """Render the scene and export it as ASCII PPM to path."""
    image = render(scene, config)
    image.export(path)
    return image
