"""Tests for the chunked parallel renderer."""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from pathtracer.camera.camera import Camera
from pathtracer.config import RenderSettings
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials.lambertian import Lambertian
from pathtracer.renderer.raytracer import Renderer, accumulate, chunk_bounds


@pytest.fixture
def narrow_camera():
    """Camera whose whole view falls on a unit sphere at the origin."""
    return Camera(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0),
                  fov=5.0, aspect_ratio=1.0)


@pytest.fixture
def light_world():
    world = World([Sphere(Vector3(0.0, 0.0, 0.0), 1.0, Lambertian(Vector3(6.0, 6.0, 6.0)))])
    world.build_bvh()
    return world


class TestChunking:
    """Tests for splitting the pixel range."""

    def test_bounds_cover_range_in_order(self):
        bounds = chunk_bounds(103, 8)
        assert bounds[0][0] == 0
        assert bounds[-1][1] == 103
        for (_, end), (start, _) in zip(bounds, bounds[1:]):
            assert end == start

    def test_more_chunks_than_pixels(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 2, 2, chunk_count=10, seed=1)
        assert renderer.render().shape == (4, 3)


class TestRender:
    """Tests for a full render pass."""

    def test_output_shape(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 6, 4, sample_rate=2, max_bounce=3, seed=3)
        assert renderer.render().shape == (24, 3)

    def test_emissive_sphere_fills_frame(self, light_world, narrow_camera):
        renderer = Renderer(light_world, narrow_camera, 3, 3, sample_rate=1, max_bounce=1, chunk_count=2, seed=0)
        frame = renderer.render()
        assert np.all(frame == 6.0)

    def test_fixed_seed_is_bit_identical(self, unit_sphere_world, front_camera):
        """Two fresh renderers with the same seed trace the same sequence of passes."""
        renderers = [Renderer(unit_sphere_world, front_camera, 6, 4, sample_rate=2, max_bounce=4,
                              chunk_count=5, seed=42) for _ in range(2)]
        for _ in range(3):
            assert np.array_equal(renderers[0].render(), renderers[1].render())

    def test_consecutive_passes_differ(self, unit_sphere_world, front_camera):
        settings = RenderSettings(width=8, height=8, seed=7)
        renderer = Renderer.from_settings(unit_sphere_world, front_camera, settings)
        first = renderer.render()
        second = renderer.render(first)
        assert not np.array_equal(first, second - first)
        assert renderer.pass_index == 2

    def test_reset_restarts_pass_sequence(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 6, 4, seed=42)
        first = renderer.render()
        renderer.render()
        renderer.reset()
        assert np.array_equal(first, renderer.render())

    def test_seed_argument_overrides(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 6, 4, sample_rate=2, max_bounce=4, seed=42)
        other = Renderer(unit_sphere_world, front_camera, 6, 4, sample_rate=2, max_bounce=4)
        assert np.array_equal(renderer.render(seed=43), other.render(seed=43))
        assert renderer.pass_index == 0
        assert not np.array_equal(renderer.render(seed=43), renderer.render(seed=44))

    def test_injected_executor_matches_default(self, unit_sphere_world, front_camera):
        """The default process pool and an injected thread pool give the same pass."""
        default = Renderer(unit_sphere_world, front_camera, 5, 5, sample_rate=2, chunk_count=7, seed=9)
        with ThreadPoolExecutor(max_workers=3) as executor:
            injected = Renderer(unit_sphere_world, front_camera, 5, 5, sample_rate=2, chunk_count=7,
                                seed=9, executor=executor)
            assert np.array_equal(default.render(), injected.render())

    def test_adds_onto_buffer(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 4, 4, seed=5)
        buffer = np.ones((16, 3))
        result = renderer.render(buffer, seed=5)
        assert np.array_equal(result, buffer + renderer.render(seed=5))
        assert np.all(buffer == 1.0)

    def test_buffer_shape_mismatch(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 4, 4, seed=5)
        with pytest.raises(ValueError):
            renderer.render(np.zeros((15, 3)))

    def test_first_row_is_top_of_image(self, front_camera):
        """Higher rows look further up the gradient sky, which has less red."""
        renderer = Renderer(World(), front_camera, 3, 5, seed=2)
        frame = renderer.render().reshape(5, 3, 3)
        assert frame[0, 1, 0] < frame[4, 1, 0]


class TestPreview:
    """Tests for the cheap preview pass."""

    def test_preview_shape_and_hit(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 5, 5, seed=0)
        frame = renderer.preview()
        assert frame.shape == (25, 3)
        # Center pixel faces the sphere head on.
        assert frame[12, 0] > 0.0

    def test_preview_miss_is_sky(self, front_camera):
        renderer = Renderer(World(), front_camera, 3, 3, seed=0)
        frame = renderer.preview()
        assert frame[:, 2] == pytest.approx(1.0)


class TestAccumulate:
    """Tests for multi-pass averaging."""

    def test_average_of_constant_passes(self, light_world, narrow_camera):
        renderer = Renderer(light_world, narrow_camera, 3, 3, max_bounce=1)
        assert np.all(accumulate(renderer, 3, seed=11) == 6.0)

    def test_reproducible(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 4, 4, sample_rate=1)
        assert np.array_equal(accumulate(renderer, 2, seed=4), accumulate(renderer, 2, seed=4))

    def test_rejects_zero_passes(self, unit_sphere_world, front_camera):
        renderer = Renderer(unit_sphere_world, front_camera, 4, 4)
        with pytest.raises(ValueError):
            accumulate(renderer, 0)


class TestValidation:
    """Tests for constructor checks."""

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"height": -1},
        {"sample_rate": 0},
        {"max_bounce": -1},
        {"chunk_count": 0},
        {"max_workers": 0},
        {"light_clamp": 0.0},
    ])
    def test_invalid_parameters(self, unit_sphere_world, front_camera, kwargs):
        params = {"width": 4, "height": 4}
        params.update(kwargs)
        with pytest.raises(ValueError):
            Renderer(unit_sphere_world, front_camera, **params)

    def test_from_settings(self, unit_sphere_world, front_camera):
        settings = RenderSettings(width=8, height=6, sample_rate=3, max_bounce=5, chunk_count=4, seed=7)
        renderer = Renderer.from_settings(unit_sphere_world, front_camera, settings)
        assert (renderer.width, renderer.height) == (8, 6)
        assert renderer.sample_rate == 3
        assert renderer.max_bounce == 5
        assert renderer.seed == 7
        assert renderer.render().shape == (48, 3)
