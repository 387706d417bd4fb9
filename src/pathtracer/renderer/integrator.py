# renderer/integrator.py
"""
Recursive path-tracing radiance estimator.

ray_color() follows a path until it escapes to the sky, is absorbed, hits an
emitter, or runs out of depth. On the last two bounces it may also shoot one
ray straight at each light's center and add the attenuated result. That
shortcut does not test for occlusion along the way, so light can leak
through objects placed between a surface and a light.
"""
import math
import random
from typing import TYPE_CHECKING, Iterable, List

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3, BLACK
from pathtracer.core.utils import clamp
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight

if TYPE_CHECKING:
    from pathtracer.config import Scene

T_MIN = 0.001
LIGHT_PROBABILITY = 0.1
DIELECTRIC_LIGHT_PROBABILITY = 0.05
# Depth budget for rays aimed at a light
LIGHT_DEPTH = 2


def find_lights(objects: Iterable) -> List[Sphere]:
    """Returns the emissive spheres of the scene, in scene order."""
    return [obj for obj in objects if isinstance(obj.material, DiffuseLight)]


def direct_light(rec, attenuation: Vector3, scene: "Scene", lights: List[Sphere],
                 rng: random.Random) -> Vector3:
    red = green = blue = 0.0
    for light in lights:
        light_ray = Ray(rec.p, light.center - rec.p)
        target = ray_color(light_ray, scene, lights, LIGHT_DEPTH, LIGHT_DEPTH - 1, rng,
                           sample_lights=False)
        red += attenuation.x * target.x
        green += attenuation.y * target.y
        blue += attenuation.z * target.z
    n = len(lights)
    return Vector3(red / n, green / n, blue / n)


def ray_color(ray: Ray, scene: "Scene", lights: List[Sphere], max_depth: int,
              depth: int, rng: random.Random, sample_lights: bool = True) -> Vector3:
    """
    Estimates the radiance arriving along `ray`.

    Args:
        ray: The ray to trace.
        scene: Scene providing `objects` and the optional `sky`.
        lights: Emissive spheres used for light sampling.
        max_depth: Depth the path started with.
        depth: Remaining bounces; 0 returns black.
        rng: Generator owned by the calling band.
        sample_lights: Disabled for rays that are themselves aimed at a light.

    Returns:
        Linear RGB color as a Vector3.
    """
    if depth <= 0:
        return BLACK

    rec = scene.objects.hit(ray, T_MIN, math.inf)
    if rec is None:
        if scene.sky is None:
            return BLACK
        return scene.sky.color(ray.direction)

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        # Absorbed rays are not worth bouncing towards lights
        return BLACK

    scattered_ray, attenuation = scattered
    if scattered_ray is None:
        return attenuation

    light = BLACK
    if sample_lights and lights:
        prob = DIELECTRIC_LIGHT_PROBABILITY if isinstance(rec.material, Dielectric) \
            else LIGHT_PROBABILITY
        if rng.random() > 1.0 - len(lights) * prob and depth > max_depth - 2:
            light = direct_light(rec, attenuation, scene, lights, rng)

    target = ray_color(scattered_ray, scene, lights, max_depth, depth - 1, rng,
                       sample_lights=sample_lights)
    return Vector3(
        clamp(light.x + attenuation.x * target.x),
        clamp(light.y + attenuation.y * target.y),
        clamp(light.z + attenuation.z * target.z),
    )
