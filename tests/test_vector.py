"""Unit tests for vectors, rays and the sampling helpers.

Tests cover:
- Vector arithmetic, products and normalization
- Immutability and value equality
- Ray evaluation
- Reflection, refraction and Schlick reflectance
"""

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.utils import clamp, random_in_unit_sphere, reflect, reflectance, refract
from pathtracer.core.vector import Vector3


class TestVectorArithmetic:
    """Tests for Vector3 operators."""

    def test_add(self):
        r = Vector3(0.1, 0.2, 0.3) + Vector3(0.2, 0.3, 0.4)
        assert r.x == pytest.approx(0.3)
        assert r.y == pytest.approx(0.5)
        assert r.z == pytest.approx(0.7)

    def test_sub(self):
        r = Vector3(0.1, 0.2, 0.3) - Vector3(0.2, 0.3, 0.4)
        assert tuple(r) == pytest.approx((-0.1, -0.1, -0.1))

    def test_neg(self):
        assert -Vector3(0.1, -0.2, 0.3) == Vector3(-0.1, 0.2, -0.3)

    def test_componentwise_mul(self):
        r = Vector3(0.1, 0.2, 0.3) * Vector3(0.2, 0.3, 0.4)
        assert tuple(r) == pytest.approx((0.02, 0.06, 0.12))

    def test_scalar_mul_both_sides(self):
        v = Vector3(1, 2, 3)
        assert v * 2 == Vector3(2, 4, 6)
        assert 2 * v == Vector3(2, 4, 6)

    def test_div(self):
        assert Vector3(2, 4, 6) / 2 == Vector3(1, 2, 3)

    def test_dot(self):
        assert Vector3(0.1, 0.2, 0.3).dot(Vector3(0.2, 0.3, 0.4)) == pytest.approx(0.2)

    def test_cross(self):
        assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)
        assert Vector3(0, 1, 0).cross(Vector3(1, 0, 0)) == Vector3(0, 0, -1)

    def test_length(self):
        assert Vector3(0.1, 0.2, 0.3).length_squared() == pytest.approx(0.14)
        assert Vector3(3, 4, 0).length() == 5.0

    def test_unit_vector(self):
        u = Vector3(0, 3, 4).unit_vector()
        assert u.length() == pytest.approx(1.0)
        assert tuple(u) == pytest.approx((0.0, 0.6, 0.8))

    def test_unit_vector_of_zero_is_nan(self):
        assert all(math.isnan(c) for c in Vector3(0, 0, 0).unit_vector())

    def test_near_zero(self):
        assert not Vector3(0.1, 0.2, 0.3).near_zero()
        assert Vector3(0.0, 0.0, 0.0).near_zero()
        assert Vector3(1e-20, -1e-20, 0.0).near_zero()
        assert not Vector3(1e-20, 1e-3, 0.0).near_zero()


class TestVectorValueSemantics:
    """Tests for immutability and equality."""

    def test_immutable(self):
        v = Vector3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5

    def test_equality_and_hash(self):
        assert Vector3(1, 2, 3) == Vector3(1.0, 2.0, 3.0)
        assert Vector3(1, 2, 3) != Vector3(1, 2, 4)
        assert len({Vector3(1, 2, 3), Vector3(1, 2, 3)}) == 1

    def test_pickle_round_trip(self):
        import pickle

        v = Vector3(1.5, -2.0, 3.25)
        assert pickle.loads(pickle.dumps(v)) == v


class TestRay:
    """Tests for Ray."""

    def test_at(self):
        r = Ray(Vector3(0, 0, 0), Vector3(1, 2, 3))
        assert tuple(r.at(0.5)) == pytest.approx((0.5, 1.0, 1.5))

    def test_direction_not_normalized(self):
        r = Ray(Vector3(1, 1, 1), Vector3(0, 0, 2))
        assert r.direction.length() == 2.0
        assert r.at(1.0) == Vector3(1, 1, 3)


class TestSamplingHelpers:
    """Tests for reflection, refraction and random sampling."""

    def test_random_in_unit_sphere(self):
        rng = random.Random(7)
        for _ in range(200):
            assert random_in_unit_sphere(rng).length_squared() < 1.0

    def test_reflect(self):
        r = reflect(Vector3(1, -1, 0), Vector3(0, 1, 0))
        assert r == Vector3(1, 1, 0)

    def test_refract_matching_indices_passes_through(self):
        uv = Vector3(1, 1, 0).unit_vector()
        out = refract(uv, Vector3(0, -1, 0), 1.0)
        assert tuple(out) == pytest.approx(tuple(uv))

    def test_refract_perpendicular_component(self):
        out = refract(Vector3(1, 1, 0), Vector3(-1, 0, 0), 1.0)
        assert out == Vector3(0, 1, 0)

    def test_refract_bends_towards_normal(self):
        uv = Vector3(1, -1, 0).unit_vector()
        n = Vector3(0, 1, 0)
        out = refract(uv, n, 1.0 / 1.5)
        assert out.length() == pytest.approx(1.0)
        # sin(theta_t) = sin(theta_i) / 1.5
        assert out.x == pytest.approx(math.sqrt(0.5) / 1.5)
        assert out.y < 0

    def test_reflectance_grazing_is_total(self):
        assert reflectance(0.0, 1.5) == 1.0

    def test_reflectance_normal_incidence(self):
        assert reflectance(1.0, 1.5) == pytest.approx(0.04)
        # Same r0 for the inverse ratio
        assert reflectance(1.0, 1.0 / 1.5) == pytest.approx(0.04)

    def test_clamp(self):
        assert clamp(-0.5) == 0.0
        assert clamp(0.25) == 0.25
        assert clamp(3.0) == 1.0
