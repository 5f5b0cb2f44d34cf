"""Tests for the sampling loop and the Renderer.

This module tests:
- RenderSettings defaults and validation
- Pixel sampling and render order
- Reproducibility from a seed
- Renderer lifecycle: progress callbacks, generators, single use
- Output from a finished render
"""

import io

import numpy as np
import pytest

from spheretrace.core.integrator import MAX_DEPTH, ray_color
from spheretrace.core.render import (
    Renderer,
    RenderSettings,
    iter_render_rows,
    render_image,
    sample_pixel,
)
from spheretrace.core.vec3 import ZERO
from spheretrace.output.ppm import format_ppm


class TestRenderSettings:
    """Test RenderSettings defaults and validation."""

    def test_defaults(self):
        """Test the default 300x168 image at 50 spp and depth 50."""
        settings = RenderSettings()
        assert settings.width == 300
        assert settings.height == 168
        assert settings.samples_per_pixel == 50
        assert settings.max_depth == MAX_DEPTH
        assert settings.seed is None
        assert settings.pixel_count == 300 * 168

    def test_for_width_derives_height(self):
        """Test height follows the 16:9 aspect ratio, truncated."""
        assert RenderSettings.for_width(400).height == 225
        assert RenderSettings.for_width(100).height == 56
        assert RenderSettings.for_width(100, aspect_ratio=2.0, seed=3).seed == 3

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": 0},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        """Test invalid dimensions, sample counts and depths raise ValueError."""
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_zero_depth_is_allowed(self):
        """Test a zero bounce budget is a valid (all-black) render."""
        assert RenderSettings(max_depth=0).max_depth == 0

    def test_make_rng_is_seeded(self):
        """Test the generator from settings follows the seed."""
        a = RenderSettings(seed=12).make_rng().random()
        b = RenderSettings(seed=12).make_rng().random()
        assert a == b


class TestSampling:
    """Test sample_pixel and render_image."""

    def test_sample_pixel_sums_samples(self, three_spheres, camera):
        """Test a pixel is the raw sum of its jittered samples."""
        width, height, spp = 16, 9, 3
        color = sample_pixel(5, 4, width, height, spp, MAX_DEPTH, three_spheres, camera, np.random.default_rng(1))

        rng = np.random.default_rng(1)
        expected = ZERO
        for _ in range(spp):
            ray = camera.get_ray_jittered(5, 4, width, height, rng)
            expected = expected + ray_color(ray, three_spheres, MAX_DEPTH, rng)
        assert color == expected

    def test_sum_is_not_averaged(self, empty_scene, camera, rng):
        """Test sky pixels sum to more than one per channel with several samples."""
        color = sample_pixel(0, 0, 4, 4, 8, MAX_DEPTH, empty_scene, camera, rng)
        assert color.z == pytest.approx(8.0)

    def test_render_image_shape(self, empty_scene, camera, rng):
        """Test the buffer has one row per pixel and three channels."""
        image = render_image(7, 5, 1, MAX_DEPTH, empty_scene, camera, rng)
        assert image.shape == (35, 3)
        assert image.dtype == np.float64

    def test_render_order_is_top_row_first(self, empty_scene, camera):
        """Test pixels are stored top row first, left to right."""
        width, height = 6, 4
        image = render_image(width, height, 2, MAX_DEPTH, empty_scene, camera, np.random.default_rng(5))

        rng = np.random.default_rng(5)
        expected = []
        for row in range(height - 1, -1, -1):
            for column in range(width):
                p = sample_pixel(column, row, width, height, 2, MAX_DEPTH, empty_scene, camera, rng)
                expected.append(tuple(p))
        np.testing.assert_array_equal(image, np.array(expected))

    def test_iter_render_rows(self, empty_scene, camera, rng):
        """Test rows come out top first with width pixels each."""
        rows = list(iter_render_rows(5, 3, 1, MAX_DEPTH, empty_scene, camera, rng))
        assert len(rows) == 3
        assert all(len(row) == 5 for row in rows)
        # Sky gets bluer toward the top, so red drops
        assert rows[0][2].x < rows[-1][2].x

    def test_same_seed_same_image(self, three_spheres, camera):
        """Test a seed reproduces an image exactly."""
        a = render_image(8, 5, 2, 10, three_spheres, camera, np.random.default_rng(21))
        b = render_image(8, 5, 2, 10, three_spheres, camera, np.random.default_rng(21))
        np.testing.assert_array_equal(a, b)

    def test_different_seeds_differ(self, three_spheres, camera):
        """Test different seeds give different noise."""
        a = render_image(8, 5, 2, 10, three_spheres, camera, np.random.default_rng(1))
        b = render_image(8, 5, 2, 10, three_spheres, camera, np.random.default_rng(2))
        assert not np.array_equal(a, b)

    def test_zero_depth_renders_black(self, three_spheres, camera, rng):
        """Test max_depth 0 gives an all-black image."""
        image = render_image(4, 3, 2, 0, three_spheres, camera, rng)
        assert not image.any()


class TestRenderer:
    """Test the Renderer lifecycle."""

    def _settings(self, **kwargs):
        defaults = {"width": 8, "height": 5, "samples_per_pixel": 2, "max_depth": 10, "seed": 3}
        defaults.update(kwargs)
        return RenderSettings(**defaults)

    def test_initial_state(self, three_spheres, camera):
        """Test a new renderer has written no rows."""
        renderer = Renderer(three_spheres, camera, self._settings())
        assert renderer.width == 8
        assert renderer.height == 5
        assert renderer.rows_done == 0
        assert not renderer.is_complete
        assert "rows_done=0" in repr(renderer)

    def test_default_settings(self, three_spheres, camera):
        """Test omitted settings fall back to RenderSettings()."""
        renderer = Renderer(three_spheres, camera)
        assert renderer.settings == RenderSettings()

    def test_render_matches_render_image(self, three_spheres, camera):
        """Test the renderer produces the same buffer as render_image."""
        settings = self._settings()
        renderer = Renderer(three_spheres, camera, settings)
        renderer.render()

        expected = render_image(
            settings.width,
            settings.height,
            settings.samples_per_pixel,
            settings.max_depth,
            three_spheres,
            camera,
            np.random.default_rng(settings.seed),
        )
        np.testing.assert_array_equal(renderer.image, expected)
        assert renderer.is_complete

    def test_explicit_rng_overrides_seed(self, three_spheres, camera):
        """Test a supplied generator is used instead of settings.seed."""
        settings = self._settings(seed=None)
        a = Renderer(three_spheres, camera, settings, rng=np.random.default_rng(4))
        b = Renderer(three_spheres, camera, settings, rng=np.random.default_rng(4))
        a.render()
        b.render()
        np.testing.assert_array_equal(a.image, b.image)

    def test_callback_reports_each_row(self, empty_scene, camera):
        """Test the callback receives (rows_done, total_rows) after every row."""
        calls = []
        renderer = Renderer(empty_scene, camera, self._settings())
        renderer.render(callback=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 5), (2, 5), (3, 5), (4, 5), (5, 5)]

    def test_render_rows_generator(self, empty_scene, camera):
        """Test the generator yields progress and fills rows as it goes."""
        renderer = Renderer(empty_scene, camera, self._settings())
        progress = renderer.render_rows()

        assert next(progress) == (1, 5)
        assert renderer.rows_done == 1
        with pytest.raises(RuntimeError, match="not rendered"):
            renderer.image

        assert list(progress) == [(2, 5), (3, 5), (4, 5), (5, 5)]
        assert renderer.is_complete

    def test_render_twice_raises(self, empty_scene, camera):
        """Test a renderer can only render once."""
        renderer = Renderer(empty_scene, camera, self._settings())
        renderer.render()
        with pytest.raises(RuntimeError, match="already used"):
            renderer.render()

    def test_image_is_read_only(self, empty_scene, camera):
        """Test the finished buffer cannot be written through."""
        renderer = Renderer(empty_scene, camera, self._settings())
        renderer.render()
        with pytest.raises(ValueError):
            renderer.image[0, 0] = 1.0

    def test_output_before_render_raises(self, empty_scene, camera):
        """Test output needs a finished render."""
        renderer = Renderer(empty_scene, camera, self._settings())
        with pytest.raises(RuntimeError, match="not rendered"):
            renderer.to_ppm()
        with pytest.raises(RuntimeError, match="not rendered"):
            renderer.write_ppm(io.StringIO())

    def test_write_ppm_matches_to_ppm(self, three_spheres, camera):
        """Test both output paths give the same text."""
        settings = self._settings()
        renderer = Renderer(three_spheres, camera, settings)
        renderer.render()

        stream = io.StringIO()
        renderer.write_ppm(stream)
        assert stream.getvalue() == renderer.to_ppm()
        assert renderer.to_ppm() == format_ppm(renderer.image, 8, 5, 2)

    def test_logs_render_start(self, empty_scene, camera, caplog):
        """Test the render start is logged at INFO."""
        renderer = Renderer(empty_scene, camera, self._settings())
        with caplog.at_level("INFO", logger="spheretrace.core.render"):
            renderer.render()
        assert "Rendering 8x5 at 2 spp" in caplog.text
        assert "Render finished" in caplog.text
