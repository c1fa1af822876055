"""Unit tests for the pinhole camera module.

Tests cover:
- Camera setup and orthonormal basis computation
- Ray generation for center and corner pixels
- Ray direction correctness
- Jittered sampling for anti-aliasing
- Edge cases (different FOV, aspect ratios, camera orientations)
"""

import math

import numpy as np
import pytest

from pathtrace.camera.pinhole import PinholeCamera
from pathtrace.core.vector import dot, length, normalize, vec3


@pytest.fixture
def camera():
    """Camera at z=3 looking at the origin with a 90 degree field of view."""
    return PinholeCamera(
        lookfrom=(0.0, 0.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=1.0,
    )


class TestCameraSetup:
    """Tests for camera setup and basis computation."""

    def test_orthonormal_basis(self, camera):
        """Test that u, v, w form an orthonormal basis."""
        u, v, w = camera.basis
        assert abs(dot(u, v)) < 1e-12
        assert abs(dot(u, w)) < 1e-12
        assert abs(dot(v, w)) < 1e-12
        for axis in (u, v, w):
            assert math.isclose(length(axis), 1.0)

    def test_basis_directions_looking_at_negative_z(self, camera):
        u, v, w = camera.basis
        assert np.allclose(u, (1.0, 0.0, 0.0))
        assert np.allclose(v, (0.0, 1.0, 0.0))
        assert np.allclose(w, (0.0, 0.0, 1.0))

    def test_origin(self, camera):
        assert np.allclose(camera.origin, (0.0, 0.0, 3.0))

    def test_tilted_up_vector_is_orthogonalized(self):
        camera = PinholeCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, -1.0),
            vup=(0.0, 1.0, 0.5),
            vfov=60.0,
            aspect_ratio=1.0,
        )
        u, v, w = camera.basis
        assert abs(dot(v, w)) < 1e-12
        assert np.allclose(v, (0.0, 1.0, 0.0))

    @pytest.mark.parametrize("vfov", [0.0, -10.0, 180.0, 200.0])
    def test_invalid_fov(self, vfov):
        with pytest.raises(ValueError):
            PinholeCamera((0, 0, 1), (0, 0, 0), (0, 1, 0), vfov, 1.0)

    def test_invalid_aspect_ratio(self):
        with pytest.raises(ValueError):
            PinholeCamera((0, 0, 1), (0, 0, 0), (0, 1, 0), 60.0, 0.0)


class TestRayGeneration:
    """Tests for primary ray generation."""

    def test_center_ray(self, camera):
        ray = camera.ray_for(0.5, 0.5)
        assert np.allclose(ray.origin, (0.0, 0.0, 3.0))
        assert np.allclose(ray.direction, (0.0, 0.0, -1.0))

    def test_corner_rays_with_90_degree_fov(self, camera):
        """Test that the viewport spans +/-1 at unit distance for 90 degrees."""
        top_right = camera.ray_for(1.0, 1.0)
        bottom_left = camera.ray_for(0.0, 0.0)
        assert np.allclose(top_right.direction, normalize(vec3(1.0, 1.0, -1.0)))
        assert np.allclose(bottom_left.direction, normalize(vec3(-1.0, -1.0, -1.0)))

    def test_directions_are_unit(self, camera):
        for u, v in [(0.0, 0.0), (0.3, 0.8), (1.0, 0.2)]:
            assert math.isclose(length(camera.ray_for(u, v).direction), 1.0)

    def test_aspect_ratio_widens_viewport(self):
        camera = PinholeCamera((0, 0, 0), (0, 0, -1), (0, 1, 0), 90.0, 2.0)
        right = camera.ray_for(1.0, 0.5)
        assert np.allclose(right.direction, normalize(vec3(2.0, 0.0, -1.0)))

    def test_center_pixel(self, camera):
        ray = camera.ray_for_pixel(1, 1, 3, 3)
        assert np.allclose(ray.direction, (0.0, 0.0, -1.0))

    def test_jitter_moves_within_pixel(self, camera):
        """Test that jitter spans exactly one pixel footprint."""
        low = camera.ray_for_pixel(0, 0, 4, 4, 0.0, 0.0)
        high = camera.ray_for_pixel(0, 0, 4, 4, 1.0, 1.0)
        next_pixel = camera.ray_for_pixel(1, 1, 4, 4, 0.0, 0.0)
        assert np.allclose(low.direction, camera.ray_for(0.0, 0.0).direction)
        assert np.allclose(high.direction, next_pixel.direction)

    def test_pixel_rows_go_bottom_to_top(self, camera):
        bottom = camera.ray_for_pixel(0, 0, 2, 2)
        top = camera.ray_for_pixel(0, 1, 2, 2)
        assert bottom.direction[1] < 0.0 < top.direction[1]
