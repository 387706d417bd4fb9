# materials/dielectric.py
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.vector import WHITE
from pathtracer.core.utils import reflect, refract, reflectance
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult


class Dielectric(Material):
    """
    Clear glass-like material. Chooses between reflection and refraction
    per ray using Schlick's approximation; never absorbs.
    """
    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        attenuation = WHITE  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        refraction_ratio = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.unit_vector()
        cos_theta = min((-unit_direction).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return Ray(rec.p, direction), attenuation

    def to_dict(self) -> dict:
        return {"Glass": {"index_of_refraction": self.ref_idx}}

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"
