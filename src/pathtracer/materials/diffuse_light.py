# materials/diffuse_light.py
import random

from pathtracer.core.ray import Ray
from pathtracer.core.vector import WHITE
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult


class DiffuseLight(Material):
    """
    Emissive material with constant white radiance.

    It never scatters: the returned color is final and ends the path.
    Spheres using it are also the targets of light sampling.
    """

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        return None, WHITE

    def to_dict(self) -> dict:
        return {"Light": {}}

    def __repr__(self) -> str:
        return "DiffuseLight()"
