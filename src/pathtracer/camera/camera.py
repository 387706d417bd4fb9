# camera/camera.py
import math

from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray


class Camera:
    """
    Pinhole camera built from a look-from/look-at pair.

    The view frame is computed once: w points from the target back to the
    eye, u is the camera right, v the camera up. `vup` must not be parallel
    to the viewing direction.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect: float):
        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.vfov = vfov  # vertical field-of-view in degrees
        self.aspect = aspect

        theta = math.radians(vfov)
        half_height = math.tan(theta / 2)
        half_width = aspect * half_height

        self.w = (look_from - look_at).unit_vector()
        self.u = vup.cross(self.w).unit_vector()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * (2.0 * half_width)
        self.vertical = self.v * (2.0 * half_height)
        self.lower_left_corner = (self.origin -
                                  self.u * half_width -
                                  self.v * half_height -
                                  self.w)
        self.focal_length = (look_from - look_at).length()

    def get_ray(self, s: float, t: float) -> Ray:
        """Returns the primary ray through normalized image coordinates (s, t)."""
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     self.origin)
        return Ray(self.origin, direction)

    def __repr__(self) -> str:
        return (f"Camera(look_from={self.look_from!r}, look_at={self.look_at!r}, "
                f"vup={self.vup!r}, vfov={self.vfov}, aspect={self.aspect})")
