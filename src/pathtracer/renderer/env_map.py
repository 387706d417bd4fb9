# renderer/env_map.py
from typing import Optional

from pathtracer.core.vector import Vector3, WHITE
from pathtracer.core.utils import clamp
from pathtracer.geometry.sphere import sphere_uv
from pathtracer.materials.textures import ImageTexture

SKY_BLUE = Vector3(0.5, 0.7, 1.0)
# Environment textures are dimmed so they don't overpower the scene lights
ENV_MAP_SCALE = 0.7


class Sky:
    """
    Background seen by rays that escape the scene.

    Without a texture, interpolates vertically between white at the horizon
    and sky blue at the zenith. With an equirectangular texture, looks up the
    pixel for the ray direction.
    """
    def __init__(self, texture: Optional[ImageTexture] = None):
        self.texture = texture

    def color(self, direction: Vector3) -> Vector3:
        unit = direction.unit_vector()
        t = clamp(0.5 * (unit.y + 1.0))
        if self.texture is None:
            return WHITE * (1.0 - t) + SKY_BLUE * t

        # Column from the same atan2 longitude as sphere surfaces. Maps laid
        # out by the x component alone, u = 0.5 * (x + 1), will look shifted.
        u, _ = sphere_uv(unit)
        tex = self.texture
        x = min(max(int(u * (tex.width - 1)), 0), tex.width - 1)
        y = min(max(int((1.0 - t) * (tex.height - 1)), 0), tex.height - 1)
        return tex.pixel(x, y) * ENV_MAP_SCALE

    def to_dict(self) -> dict:
        if self.texture is None:
            return {"texture": ""}
        return {"texture": self.texture.path or ""}

    def __repr__(self) -> str:
        return f"Sky({self.texture!r})"
