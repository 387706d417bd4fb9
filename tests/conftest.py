"""Pytest configuration for path tracer tests.

Provides seeded random generators and small scene builders shared by the
test modules.
"""

import random

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.config import Scene
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.renderer.env_map import Sky


@pytest.fixture
def rng():
    """A seeded generator so stochastic tests are reproducible."""
    return random.Random(1234)


@pytest.fixture
def make_scene():
    """Factory for small scenes looking down -z from the origin."""

    def _make(objects=(), sky=None, width=10, height=10, samples_per_pixel=1, max_depth=1):
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                        90.0, width / height)
        return Scene(width, height, samples_per_pixel, max_depth, camera,
                     HittableList(objects), sky)

    return _make


@pytest.fixture
def diffuse_scene(make_scene):
    """One diffuse sphere of radius 0.5 at (0, 0, -1) under a gradient sky."""
    sphere = Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.8, 0.3, 0.3)))
    return make_scene([sphere], sky=Sky(), width=100, height=100)
