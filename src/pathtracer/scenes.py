# scenes.py
"""Built-in demo scenes."""
import math
import os
import random
from typing import Optional

from pathtracer.camera.camera import Camera
from pathtracer.config import Scene
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian, TexturedLambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.texture_loader import load_texture
from pathtracer.renderer.env_map import Sky


def make_cover_world(rng: random.Random) -> HittableList:
    """
    Ground sphere, a 22x22 field of small random spheres and three large
    feature spheres (glass, diffuse, mirror).
    """
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(Vector3(0.5, 0.5, 0.5))))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Vector3(4, 0.2, 0)).length() < 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = Vector3(rng.random() * rng.random(),
                                 rng.random() * rng.random(),
                                 rng.random() * rng.random())
                world.add(Sphere(center, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                # metal
                albedo = Vector3(0.5 * (1 + rng.random()),
                                 0.5 * (1 + rng.random()),
                                 0.5 * (1 + rng.random()))
                world.add(Sphere(center, 0.2, Metal(albedo, 0.5 * rng.random())))
            else:
                # glass
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))
    return world


def cover_scene(width: int = 800, height: int = 600, samples_per_pixel: int = 64,
                max_depth: int = 50, rng: Optional[random.Random] = None) -> Scene:
    rng = rng or random.Random()
    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0),
                    20.0, width / height)
    return Scene(width, height, samples_per_pixel, max_depth, camera,
                 make_cover_world(rng), Sky())


def earth_scene(texture_dir: str, rot: float = 0.0, width: int = 800, height: int = 600,
                samples_per_pixel: int = 4, max_depth: int = 50) -> Scene:
    """
    Textured earth and moon over a mirror floor, lit by one large light,
    with a hollow glass ball. Expects earth.jpg and moon.jpg in texture_dir.
    `rot` in [0, 1) orbits the camera and spins the textures.
    """
    earth = TexturedLambertian(load_texture(os.path.join(texture_dir, "earth.jpg"), rot))
    moon = TexturedLambertian(load_texture(os.path.join(texture_dir, "moon.jpg"), rot))

    world = HittableList()
    world.add(Sphere(Vector3(0, 0, -1), 0.5, earth))
    world.add(Sphere(Vector3(-1, 0.2, -1), 0.1, moon))
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Metal(Vector3(0.8, 0.8, 0.8), 0.0)))
    world.add(Sphere(Vector3(0, 16, 20), 15, DiffuseLight()))
    world.add(Sphere(Vector3(1, 0.5, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), 0.1)))
    # Glass bubble: the inner sphere's negative radius flips its normals
    world.add(Sphere(Vector3(-1.2, 0, -1), 0.5, Dielectric(1.5)))
    world.add(Sphere(Vector3(-1.2, 0, -1), -0.45, Dielectric(1.5)))

    angle = rot * 2 * math.pi
    camera = Camera(Vector3(-2 - 0.5 * math.cos(angle), 1 + 0.5 * math.sin(angle), 1),
                    Vector3(0, 0, -1), Vector3(0, 1, 0), 50.0, width / height)
    return Scene(width, height, samples_per_pixel, max_depth, camera, world)
