"""Unit tests for Taichi batch ray generation.

Tests cover:
- Array shapes and unit directions
- Agreement with Camera.ray_for_pixel
- Row ranges and argument validation
- Conversion back to Ray objects
"""

import math

import numpy as np
import pytest


def _camera():
    from whitted.camera.camera import Camera
    from whitted.core.tuples import point, vector

    return Camera.look_at(7, 5, math.pi / 3, point(1, 2, -6), point(0, 0.5, 0), vector(0, 1, 0))


class TestGeneratePrimaryRays:
    """Tests for generate_primary_rays."""

    def test_shapes(self, taichi_cpu):
        """Test the arrays cover the requested rows."""
        from whitted.camera.raygen import generate_primary_rays

        origins, directions = generate_primary_rays(_camera())
        assert origins.shape == (5, 7, 3)
        assert directions.shape == (5, 7, 3)
        assert np.allclose(np.linalg.norm(directions, axis=2), 1.0)

    def test_matches_ray_for_pixel(self, taichi_cpu):
        """Test every generated ray equals the camera's own ray."""
        from whitted.camera.raygen import generate_primary_rays

        camera = _camera()
        origins, directions = generate_primary_rays(camera)
        for py in range(camera.vsize):
            for px in range(camera.hsize):
                ray = camera.ray_for_pixel(px, py)
                np.testing.assert_allclose(
                    origins[py, px], [ray.origin.x, ray.origin.y, ray.origin.z], atol=1e-9
                )
                np.testing.assert_allclose(
                    directions[py, px],
                    [ray.direction.x, ray.direction.y, ray.direction.z],
                    atol=1e-9,
                )

    def test_row_range(self, taichi_cpu):
        """Test a block of rows matches the same rows of the full image."""
        from whitted.camera.raygen import generate_primary_rays

        camera = _camera()
        _, full = generate_primary_rays(camera)
        _, block = generate_primary_rays(camera, 2, 4)
        assert block.shape == (2, 7, 3)
        np.testing.assert_allclose(block, full[2:4], atol=1e-12)

    @pytest.mark.parametrize("start,end", [(-1, 3), (3, 3), (4, 2), (0, 6)])
    def test_invalid_row_range(self, start, end):
        """Test empty or out-of-bounds ranges are rejected before any kernel runs."""
        from whitted.camera.raygen import generate_primary_rays

        with pytest.raises(ValueError, match="row range"):
            generate_primary_rays(_camera(), start, end)


class TestRaysFromArrays:
    """Tests for rays_from_arrays."""

    def test_converts_to_rays(self):
        """Test arrays become nested lists of Ray objects."""
        from whitted.camera.raygen import rays_from_arrays
        from whitted.core.tuples import point, vector

        origins = np.zeros((1, 2, 3))
        directions = np.array([[[0.0, 0.0, -1.0], [0.0, 1.0, 0.0]]])
        rays = rays_from_arrays(origins, directions)
        assert len(rays) == 1 and len(rays[0]) == 2
        assert rays[0][0].origin == point(0, 0, 0)
        assert rays[0][1].direction == vector(0, 1, 0)

    def test_shape_mismatch(self):
        """Test mismatched arrays raise ValueError."""
        from whitted.camera.raygen import rays_from_arrays

        with pytest.raises(ValueError, match="shapes must match"):
            rays_from_arrays(np.zeros((1, 2, 3)), np.zeros((2, 2, 3)))
