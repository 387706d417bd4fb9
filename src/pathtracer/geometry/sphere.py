# geometry/sphere.py
import math
from typing import Optional, Tuple

from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


def sphere_uv(direction: Vector3) -> Tuple[float, float]:
    """
    Maps a direction from the sphere center to equirectangular (u, v)
    coordinates, both in [0, 1].
    """
    n = direction.unit_vector()
    u = math.atan2(n.x, n.z) / (2 * math.pi) + 0.5
    v = n.y * 0.5 + 0.5
    return u, v


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    A negative radius flips the outward normal, which models a hollow shell.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Nearer root first so the closest hit wins
        for root in ((-half_b - sqrt_disc) / a, (-half_b + sqrt_disc) / a):
            if t_min < root < t_max:
                rec = HitRecord()
                rec.t = root
                rec.p = ray.at(root)
                outward_normal = (rec.p - self.center) / self.radius
                rec.set_face_normal(ray, outward_normal)
                rec.u, rec.v = sphere_uv(rec.p - self.center)
                rec.material = self.material
                return rec
        return None

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
