import numpy as np
import pytest

from ppmtrace.geometry import Sphere
from ppmtrace.render import RenderConfig, Renderer, render, render_to_file
from ppmtrace.scene import Scene
from ppmtrace.scenes import build_demo_scene
from ppmtrace.vector import Color, Vector3


def small_config(**kwargs) -> RenderConfig:
    defaults = {"resolution": 2, "width": 6.0, "height": 4.0, "eye": Vector3(0.0, 0.0, -10.0)}
    defaults.update(kwargs)
    return RenderConfig(**defaults)


@pytest.fixture
def ball_scene():
    return Scene.of(
        [
            Sphere(center=Vector3(0.0, 0.0, 10.0), radius=4.0, color=Color(1.0, 0.5, 0.0)),
            Sphere(center=Vector3(2.0, 1.0, 6.0), radius=1.5, color=Color(0.0, 0.2, 1.0)),
        ],
    )


class TestRenderConfig:
    """Tests for render configuration."""

    def test_defaults_match_demo_settings(self):
        cfg = RenderConfig()
        assert (cfg.rows, cfg.cols) == (1000, 1000)
        assert cfg.eye == Vector3(0.0, 0.0, -200.0)
        assert cfg.normalize
        assert cfg.falloff_distance() == pytest.approx(200.0)

    def test_falloff_disabled(self):
        assert RenderConfig(depth_falloff=False).falloff_distance() is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"resolution": 0},
            {"width": 0.0},
            {"height": -1.0},
            {"band_rows": 0},
            {"method": "parallel"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            RenderConfig(**kwargs)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            RenderConfig(backend="opencl")

    @pytest.mark.parametrize(
        "width, resolution, cols",
        [(0.5, 3, 2), (0.5, 1, 1), (0.29, 100, 29), (100.0, 10, 1000), (2.5, 2, 5)],
    )
    def test_fractional_extent_keeps_partial_pixel(self, width, resolution, cols):
        """Every integer column index below width * resolution gets a pixel."""
        cfg = RenderConfig(resolution=resolution, width=width, height=width)
        assert cfg.cols == cols
        assert cfg.rows == cols

    def test_sub_pixel_viewport_renders(self):
        image = render(build_demo_scene(), RenderConfig(resolution=1, width=0.5, height=1.0))
        assert image.shape == (1, 1)


class TestRenderer:
    """Tests for the render driver."""

    # =========================================================================
    # Pixel mapping
    # =========================================================================

    def test_screen_point_mapping(self, ball_scene):
        r = Renderer(ball_scene, small_config())
        assert r.screen_point(0, 0) == Vector3(-3.0, -2.0, 0.0)
        assert r.screen_point(3, 5) == Vector3(-0.5, -0.5, 0.0)

    def test_screen_grid_matches_screen_point(self, ball_scene):
        r = Renderer(ball_scene, small_config())
        grid = r.screen_grid()
        assert grid.shape == (8, 12, 3)
        for row in (0, 3, 7):
            for col in (0, 5, 11):
                np.testing.assert_allclose(grid[row, col], r.screen_point(row, col).as_tuple())

    def test_screen_grid_band(self, ball_scene):
        r = Renderer(ball_scene, small_config())
        np.testing.assert_array_equal(r.screen_grid(2, 5), r.screen_grid()[2:5])

    def test_screen_grid_covers_partial_column(self, ball_scene):
        r = Renderer(ball_scene, small_config(resolution=3, width=0.5, height=1.0))
        grid = r.screen_grid()
        assert grid.shape == (3, 2, 3)
        np.testing.assert_allclose(grid[2, 1], r.screen_point(2, 1).as_tuple())
        assert grid[0, 1, 0] == pytest.approx(1.0 / 3.0 - 0.25)
        assert grid[..., 0].max() < 0.25

    # =========================================================================
    # Rendering
    # =========================================================================

    @pytest.mark.parametrize("normalize", [False, True])
    @pytest.mark.parametrize("falloff", [False, True])
    def test_scalar_and_vectorized_agree(self, ball_scene, normalize, falloff):
        scalar = render(ball_scene, small_config(method="scalar", normalize=normalize, depth_falloff=falloff))
        vectorized = render(
            ball_scene,
            small_config(method="vectorized", normalize=normalize, depth_falloff=falloff, band_rows=3),
        )
        assert scalar.shape == vectorized.shape == (8, 12)
        np.testing.assert_allclose(vectorized.to_array(), scalar.to_array(), rtol=1e-9, atol=1e-12)

    def test_pixels_are_shoot_ray_results(self, ball_scene):
        from ppmtrace.caster import RayCaster

        cfg = small_config(normalize=False, depth_falloff=False)
        image = render(ball_scene, cfg)
        caster = RayCaster(ball_scene)
        r = Renderer(ball_scene, cfg)
        for row, col in [(0, 0), (4, 6), (7, 11), (2, 9)]:
            expected = caster.shoot_ray(cfg.eye, r.screen_point(row, col))
            np.testing.assert_allclose(image.get(row, col).as_tuple(), expected.as_tuple(), atol=1e-12)

    def test_empty_scene_renders_black(self):
        image = render(Scene(), small_config())
        np.testing.assert_array_equal(image.to_array(), np.zeros((8, 12, 3)))

    def test_normalized_output_in_unit_range(self, ball_scene):
        out = render(ball_scene, small_config()).to_array()
        assert out.min() >= 0.0
        assert out.max() <= 1.0

    def test_render_to_file(self, ball_scene, tmp_path):
        path = tmp_path / "out.ppm"
        image = render_to_file(ball_scene, path, small_config())
        lines = path.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "12 8", "255"]
        assert len(lines) == 3 + 8 * 12
        assert lines[3:] == image.to_ppm().splitlines()[3:]

    def test_progress_bar_does_not_change_output(self, ball_scene):
        quiet = render(ball_scene, small_config())
        noisy = render(ball_scene, small_config(progress=True))
        np.testing.assert_array_equal(quiet.to_array(), noisy.to_array())


class TestDemoScene:
    """Tests for the demo scene builder."""

    def test_object_count_and_order(self):
        scene = build_demo_scene()
        assert len(scene) == 3 + 5 * 6
        first = scene.objects[0]
        assert first.center == Vector3(0.0, -300.0, 1200.0)
        assert first.color == Color(1.0, 0.0, 0.0)
        assert scene.objects[3].center == Vector3(-400.0, 300.0, 800.0)
        assert scene.objects[-1].center == Vector3(400.0, 300.0, 2800.0)

    def test_builder_is_pure(self):
        assert build_demo_scene() == build_demo_scene()

    def test_low_resolution_demo_render(self):
        cfg = RenderConfig(resolution=1, width=20.0, height=20.0)
        image = render(build_demo_scene(), cfg)
        assert image.shape == (20, 20)
        assert np.all(np.isfinite(image.to_array()))
