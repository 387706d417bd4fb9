# config.py
"""
Scene description and its JSON (de)serialization.

A scene file looks like:

    {
      "width": 800, "height": 600, "samples_per_pixel": 64, "max_depth": 50,
      "sky": {"texture": ""},
      "camera": {"look_from": {"x": 13.0, "y": 2.0, "z": 3.0},
                 "look_at": {"x": 0.0, "y": 0.0, "z": 0.0},
                 "vup": {"x": 0.0, "y": 1.0, "z": 0.0},
                 "vfov": 20.0, "aspect": 1.3333},
      "objects": [
        {"center": {"x": 0.0, "y": -1000.0, "z": 0.0}, "radius": 1000.0,
         "material": {"Lambertian": {"albedo": [0.5, 0.5, 0.5]}}}
      ]
    }

`sky` may be null (black background) or name an equirectangular texture.
Material tags are Lambertian, Metal, Glass, Texture and Light. Texture
images are decoded when the scene is loaded, never during a render.
"""
import dataclasses
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3, WHITE
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian, TexturedLambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.texture_loader import load_texture
from pathtracer.renderer.env_map import Sky

QUALITY_LEVELS = {
    "preview": {"samples": 1, "bounces": 4, "scale": 0.5},
    "balanced": {"samples": 16, "bounces": 10, "scale": 1.0},
    "high_quality": {"samples": 64, "bounces": 50, "scale": 1.0},
}


@dataclass
class Scene:
    width: int
    height: int
    samples_per_pixel: int
    max_depth: int
    camera: Camera
    objects: HittableList = field(default_factory=HittableList)
    sky: Optional[Sky] = None

    def validate(self) -> None:
        for name in ("width", "height", "samples_per_pixel", "max_depth"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def with_overrides(self, width: Optional[int] = None, height: Optional[int] = None,
                       samples_per_pixel: Optional[int] = None,
                       max_depth: Optional[int] = None) -> "Scene":
        """Returns a copy with the given render settings replaced."""
        changes = {
            "width": width, "height": height,
            "samples_per_pixel": samples_per_pixel, "max_depth": max_depth,
        }
        return dataclasses.replace(self, **{k: v for k, v in changes.items() if v is not None})

    def with_quality(self, level: str) -> "Scene":
        """Returns a copy using one of the QUALITY_LEVELS presets."""
        try:
            quality = QUALITY_LEVELS[level]
        except KeyError:
            raise ValueError(f"Unknown quality level {level!r}; "
                             f"choose from {', '.join(QUALITY_LEVELS)}") from None
        return self.with_overrides(
            width=max(1, int(self.width * quality["scale"])),
            height=max(1, int(self.height * quality["scale"])),
            samples_per_pixel=quality["samples"],
            max_depth=quality["bounces"],
        )

    def with_texture_rotation(self, rot: float) -> "Scene":
        """Returns a copy whose textured spheres are rotated horizontally by rot."""
        objects = HittableList()
        for obj in self.objects:
            if isinstance(obj.material, TexturedLambertian):
                obj = Sphere(obj.center, obj.radius, obj.material.rotated(rot))
            objects.add(obj)
        return dataclasses.replace(self, objects=objects)


def _require(data: Dict[str, Any], key: str, context: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError):
        raise ValueError(f"{context}: missing required field '{key}'") from None


def _vector(data: Any, context: str) -> Vector3:
    if isinstance(data, dict):
        return Vector3(_require(data, "x", context), _require(data, "y", context),
                       _require(data, "z", context))
    if isinstance(data, (list, tuple)) and len(data) == 3:
        return Vector3(*data)
    raise ValueError(f"{context}: expected a vector, got {data!r}")


def _resolve(path: str, base_dir: Optional[str]) -> str:
    if base_dir and not os.path.isabs(path):
        return os.path.join(base_dir, path)
    return path


def material_from_dict(data: Dict[str, Any], base_dir: Optional[str] = None,
                       context: str = "material") -> Material:
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"{context}: expected a single material tag, got {data!r}")
    (tag, params), = data.items()
    params = params or {}
    if tag == "Lambertian":
        return Lambertian(_vector(_require(params, "albedo", context), context))
    if tag == "Metal":
        return Metal(_vector(_require(params, "albedo", context), context),
                     float(params.get("fuzz", 0.0)))
    if tag == "Glass":
        return Dielectric(float(_require(params, "index_of_refraction", context)))
    if tag == "Texture":
        path = _require(params, "pixels", context)
        texture = load_texture(_resolve(path, base_dir), float(params.get("h_offset", 0.0)))
        albedo = _vector(params["albedo"], context) if "albedo" in params else WHITE
        return TexturedLambertian(texture, albedo)
    if tag == "Light":
        return DiffuseLight()
    raise ValueError(f"{context}: unknown material type '{tag}'")


def camera_from_dict(data: Dict[str, Any]) -> Camera:
    return Camera(
        _vector(_require(data, "look_from", "camera"), "camera.look_from"),
        _vector(_require(data, "look_at", "camera"), "camera.look_at"),
        _vector(_require(data, "vup", "camera"), "camera.vup"),
        float(_require(data, "vfov", "camera")),
        float(_require(data, "aspect", "camera")),
    )


def sky_from_dict(data: Optional[Dict[str, Any]], base_dir: Optional[str] = None) -> Optional[Sky]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"sky: expected null or an object, got {data!r}")
    path = data.get("texture") or ""
    if not path:
        return Sky()
    return Sky(load_texture(_resolve(path, base_dir)))


def scene_from_dict(data: Dict[str, Any], base_dir: Optional[str] = None) -> Scene:
    """
    Build a validated Scene from parsed JSON.

    Raises:
        ValueError: If a field is missing or malformed
        FileNotFoundError: If a referenced texture doesn't exist
    """
    objects = HittableList()
    for i, obj in enumerate(_require(data, "objects", "scene")):
        context = f"objects[{i}]"
        objects.add(Sphere(
            _vector(_require(obj, "center", context), f"{context}.center"),
            float(_require(obj, "radius", context)),
            material_from_dict(_require(obj, "material", context), base_dir,
                               f"{context}.material"),
        ))

    scene = Scene(
        width=_require(data, "width", "scene"),
        height=_require(data, "height", "scene"),
        samples_per_pixel=_require(data, "samples_per_pixel", "scene"),
        max_depth=_require(data, "max_depth", "scene"),
        camera=camera_from_dict(_require(data, "camera", "scene")),
        objects=objects,
        sky=sky_from_dict(data.get("sky"), base_dir),
    )
    scene.validate()
    return scene


def load_scene(path: str) -> Scene:
    """Load a scene from a JSON file. Texture paths are relative to the file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid scene file {path}: {e}") from e
    return scene_from_dict(data, os.path.dirname(os.path.abspath(path)))


def _vector_dict(v: Vector3) -> Dict[str, float]:
    return {"x": v.x, "y": v.y, "z": v.z}


def scene_to_dict(scene: Scene) -> Dict[str, Any]:
    """Inverse of scene_from_dict. Textures are written as their source path."""
    camera = scene.camera
    return {
        "width": scene.width,
        "height": scene.height,
        "samples_per_pixel": scene.samples_per_pixel,
        "max_depth": scene.max_depth,
        "sky": None if scene.sky is None else scene.sky.to_dict(),
        "camera": {
            "look_from": _vector_dict(camera.look_from),
            "look_at": _vector_dict(camera.look_at),
            "vup": _vector_dict(camera.vup),
            "vfov": camera.vfov,
            "aspect": camera.aspect,
        },
        "objects": [
            {
                "center": _vector_dict(obj.center),
                "radius": obj.radius,
                "material": obj.material.to_dict(),
            }
            for obj in scene.objects
        ],
    }


def save_scene(scene: Scene, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(scene_to_dict(scene), f, indent=2)
