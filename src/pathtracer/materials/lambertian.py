# materials/lambertian.py
import random

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3, WHITE
from pathtracer.core.utils import random_in_unit_sphere
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult
from pathtracer.materials.textures import ImageTexture


def diffuse_direction(rec: HitRecord, rng: random.Random) -> Vector3:
    # Pick a random scatter direction by adding a random vector to the normal.
    scatter_direction = rec.normal + random_in_unit_sphere(rng)

    # If scatter_direction is degenerate, just use the normal.
    if scatter_direction.near_zero():
        scatter_direction = rec.normal
    return scatter_direction


class Lambertian(Material):
    """
    Lambertian diffuse material with a solid albedo.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation).
        """
        scattered = Ray(rec.p, diffuse_direction(rec, rng))
        return scattered, self.albedo

    def to_dict(self) -> dict:
        return {"Lambertian": {"albedo": list(self.albedo)}}

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"


class TexturedLambertian(Material):
    """
    Diffuse material whose albedo is looked up in an image texture at the
    hit's (u, v) coordinates. The texel is the attenuation; `albedo` is only
    carried so scene files keep their field.
    """

    def __init__(self, texture: ImageTexture, albedo: Vector3 = WHITE):
        self.texture = texture
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterResult:
        scattered = Ray(rec.p, diffuse_direction(rec, rng))
        attenuation = self.texture.sample(rec.u, rec.v)
        return scattered, attenuation

    def rotated(self, rot: float) -> "TexturedLambertian":
        """Returns a copy with the texture's horizontal offset advanced by rot."""
        return TexturedLambertian(self.texture.rotated(rot), self.albedo)

    def to_dict(self) -> dict:
        return {"Texture": {
            "albedo": list(self.albedo),
            "pixels": self.texture.path or "",
            "h_offset": self.texture.h_offset,
        }}

    def __repr__(self) -> str:
        return f"TexturedLambertian({self.texture!r}, {self.albedo!r})"
