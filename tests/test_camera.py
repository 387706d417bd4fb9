"""Unit tests for the pinhole camera.

Tests cover:
- View frame construction from look-from/look-at
- Orthonormality of the (u, v, w) basis
- Primary ray generation
"""

import math

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3


class TestCameraFrame:
    """Tests for the derived view frame."""

    def test_axis_aligned_camera(self):
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                        90.0, 800.0 / 600.0)
        assert camera.origin == Vector3(0, 0, 0)
        llc = camera.lower_left_corner
        assert llc.x == pytest.approx(-(1.0 + 1.0 / 3.0))
        assert llc.y == pytest.approx(-1.0)
        assert llc.z == pytest.approx(-1.0)
        assert tuple(camera.horizontal) == pytest.approx((8.0 / 3.0, 0.0, 0.0))
        assert tuple(camera.vertical) == pytest.approx((0.0, 2.0, 0.0))

    @pytest.mark.parametrize("look_from, look_at, vup", [
        (Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0)),
        (Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0)),
        (Vector3(-4, 4, 1), Vector3(0, 0, -1), Vector3(0, 1, 0)),
        (Vector3(1, 0, 0), Vector3(0, 0, 0), Vector3(0, 0, 1)),
    ])
    def test_basis_is_orthonormal(self, look_from, look_at, vup):
        camera = Camera(look_from, look_at, vup, 40.0, 1.5)
        u, v, w = camera.u, camera.v, camera.w
        for axis in (u, v, w):
            assert axis.length() == pytest.approx(1.0)
        assert u.dot(v) == pytest.approx(0.0, abs=1e-12)
        assert u.dot(w) == pytest.approx(0.0, abs=1e-12)
        assert v.dot(w) == pytest.approx(0.0, abs=1e-12)

    def test_w_points_back_at_eye(self):
        camera = Camera(Vector3(0, 0, 5), Vector3(0, 0, 0), Vector3(0, 1, 0), 60.0, 1.0)
        assert tuple(camera.w) == pytest.approx((0.0, 0.0, 1.0))
        assert camera.focal_length == pytest.approx(5.0)

    def test_field_of_view_sets_viewport(self):
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 60.0, 2.0)
        half_height = math.tan(math.radians(30.0))
        assert camera.vertical.length() == pytest.approx(2 * half_height)
        assert camera.horizontal.length() == pytest.approx(4 * half_height)


class TestCameraRays:
    """Tests for primary ray generation."""

    def test_center_ray(self):
        camera = Camera(Vector3(-4, 4, 1), Vector3(0, 0, -1), Vector3(0, 1, 0),
                        160.0, float(800 // 600))
        ray = camera.get_ray(0.5, 0.5)
        assert ray.origin == Vector3(-4, 4, 1)
        assert ray.direction.x == pytest.approx(2.0 / 3.0)
        assert ray.direction.y == pytest.approx(-2.0 / 3.0)
        assert ray.direction.z == pytest.approx(-1.0 / 3.0)

    def test_corner_rays(self):
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90.0, 1.0)
        assert tuple(camera.get_ray(0.0, 0.0).direction) == pytest.approx((-1.0, -1.0, -1.0))
        assert tuple(camera.get_ray(1.0, 1.0).direction) == pytest.approx((1.0, 1.0, -1.0))
