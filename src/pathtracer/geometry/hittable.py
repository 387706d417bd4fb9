# geometry/hittable.py
from typing import Optional

from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray


class HitRecord:
    """
    Records details of a ray-object intersection.
    Only lives for the duration of one intersection query.
    """
    __slots__ = ("t", "p", "normal", "front_face", "material", "u", "v")

    def __init__(self, t: float = 0.0, p: Vector3 = None, normal: Vector3 = None,
                 front_face: bool = True, material=None, u: float = 0.0, v: float = 0.0):
        self.t = t                    # Ray parameter at intersection
        self.p = p                    # Intersection point
        self.normal = normal          # Surface normal, always against the ray
        self.front_face = front_face  # Whether the hit was on the outward side
        self.material = material
        self.u = u                    # Surface texture coordinates
        self.v = v

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")
