from __future__ import annotations

from ppmtrace.geometry import Sphere
from ppmtrace.scene import Scene
from ppmtrace.vector import Color, Vector3

# Three overlapping primaries in front of the camera
PRIMARY_SPHERES = (
    (Vector3(0.0, -300.0, 1200.0), Color(1.0, 0.0, 0.0)),
    (Vector3(-80.0, -150.0, 1200.0), Color(0.0, 1.0, 0.0)),
    (Vector3(70.0, -100.0, 1200.0), Color(0.0, 0.0, 1.0)),
)
PRIMARY_RADIUS = 200.0

# Floor of small white spheres receding in depth
GRID_X = range(-2, 3)
GRID_Z = range(2, 8)
GRID_SPACING_X = 200.0
GRID_SPACING_Z = 400.0
GRID_Y = 300.0
GRID_RADIUS = 40.0


def build_demo_scene() -> Scene:
    """Three colored spheres above a 5 x 6 grid of white ones."""
    objects: list[Sphere] = [
        Sphere(center=center, radius=PRIMARY_RADIUS, color=color)
        for center, color in PRIMARY_SPHERES
    ]
    for z in GRID_Z:
        for x in GRID_X:
            objects.append(
                Sphere(
                    center=Vector3(GRID_SPACING_X * x, GRID_Y, GRID_SPACING_Z * z),
                    radius=GRID_RADIUS,
                    color=Color.white(),
                ),
            )
    return Scene.of(objects)
