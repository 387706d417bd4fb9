# materials/material.py
from typing import Optional, Tuple
import random

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord

# (scattered ray or None for a terminal emitter, attenuation color)
ScatterResult = Optional[Tuple[Optional[Ray], Vector3]]


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    scatter() returns None when the ray is absorbed. Otherwise it returns
    (scattered_ray, attenuation); a scattered_ray of None marks a terminal
    emitter whose attenuation is final radiance.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def to_dict(self) -> dict:
        """Serializes the material as a {tag: params} mapping."""
        raise NotImplementedError("to_dict() must be implemented by subclasses.")
