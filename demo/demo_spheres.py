from __future__ import annotations

import logging

from ppmtrace.backend import BackendName
from ppmtrace.render import RenderConfig, render_to_file
from ppmtrace.scenes import build_demo_scene
from ppmtrace.vector import Vector3

# ============================================================
# RENDER SETTINGS (edit these)
# ============================================================
BACKEND: BackendName = "auto"
METHOD = "vectorized"
OUTPUT_PATH = "x.ppm"
SHOW_PREVIEW = False

# Viewport on the z = 0 plane, in world units, and samples per unit
VIEW_WIDTH = 100.0
VIEW_HEIGHT = 100.0
RESOLUTION = 10

EYE = Vector3(0.0, 0.0, -200.0)
SCREEN_CENTER = Vector3(0.0, 0.0, 0.0)

NORMALIZE = True
DEPTH_FALLOFF = True


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    scene = build_demo_scene()
    config = RenderConfig(
        resolution=int(RESOLUTION),
        width=float(VIEW_WIDTH),
        height=float(VIEW_HEIGHT),
        eye=EYE,
        falloff_reference=SCREEN_CENTER,
        normalize=NORMALIZE,
        depth_falloff=DEPTH_FALLOFF,
        method=METHOD,
        backend=BACKEND,
        progress=True,
    )
    image = render_to_file(scene, OUTPUT_PATH, config)

    if SHOW_PREVIEW:
        from ppmtrace.viz.preview import ImagePreview

        preview = ImagePreview(title="ppmtrace - demo spheres")
        preview.draw(image)
        preview.show()


if __name__ == "__main__":
    main()
