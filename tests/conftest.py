import os

import pytest

os.environ.setdefault("PPMTRACE_MPL_BACKEND", "Agg")

from ppmtrace.geometry import Sphere  # noqa: E402
from ppmtrace.scene import Scene  # noqa: E402
from ppmtrace.vector import Color, Vector3  # noqa: E402


@pytest.fixture
def red_sphere():
    return Sphere(center=Vector3(0.0, 0.0, 10.0), radius=2.0, color=Color(1.0, 0.0, 0.0))


@pytest.fixture
def overlapping_scene():
    """Green sphere listed first but behind the red one along +z."""
    return Scene.of(
        [
            Sphere(center=Vector3(0.0, 0.0, 20.0), radius=6.0, color=Color(0.0, 1.0, 0.0)),
            Sphere(center=Vector3(0.0, 0.0, 10.0), radius=2.0, color=Color(1.0, 0.0, 0.0)),
        ],
    )
