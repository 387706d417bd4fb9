# renderer/raytracer.py
import os
import random
import time
from concurrent.futures import ProcessPoolExecutor
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np
from PIL import Image

from pathtracer.geometry.sphere import Sphere
from pathtracer.renderer.integrator import find_lights, ray_color
from pathtracer.renderer.tone_mapping import gamma_correct

if TYPE_CHECKING:
    from pathtracer.config import Scene

# Per-process scene state, installed once by the pool initializer
_worker_scene = None
_worker_lights = None


def write_image(filename: str, pixels: np.ndarray) -> None:
    """
    Write a (height, width, 3) RGB8 buffer as a PNG file.
    I/O errors propagate to the caller.
    """
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(filename, format="PNG")


def render_band(scene: "Scene", lights: List[Sphere], y_start: int, y_end: int,
                rng: random.Random) -> np.ndarray:
    """
    Render rows [y_start, y_end) of the image.

    Returns:
        (y_end - y_start, width, 3) uint8 array, top row first.
    """
    width, height = scene.width, scene.height
    samples = scene.samples_per_pixel
    max_depth = scene.max_depth
    camera = scene.camera
    # A one-pixel-wide image maps its only column with a unit denominator
    u_den = max(width - 1, 1)
    v_den = max(height - 1, 1)

    accumulated = np.zeros((y_end - y_start, width, 3), dtype=np.float64)
    for j, y in enumerate(range(y_start, y_end)):
        row = accumulated[j]
        for x in range(width):
            red = green = blue = 0.0
            for _ in range(samples):
                u = (x + rng.random()) / u_den
                v = (height - (y + rng.random())) / v_den
                c = ray_color(camera.get_ray(u, v), scene, lights, max_depth, max_depth, rng)
                red += c.x
                green += c.y
                blue += c.z
            row[x] = (red, green, blue)
    return gamma_correct(accumulated, samples)


def _init_worker(scene: "Scene", lights: List[Sphere]) -> None:
    global _worker_scene, _worker_lights
    _worker_scene = scene
    _worker_lights = lights


def _band_rng(seed: Optional[int], band_index: int) -> random.Random:
    if seed is None:
        return random.Random()
    return random.Random(seed + band_index)


def _render_band_job(job: Tuple[int, int, int, Optional[int]]) -> Tuple[int, np.ndarray]:
    """Worker entry point: renders one band against the installed scene."""
    band_index, y_start, y_end, seed = job
    rng = _band_rng(seed, band_index)
    return y_start, render_band(_worker_scene, _worker_lights, y_start, y_end, rng)


class Renderer:
    """
    Splits the image into disjoint row bands and renders them in parallel.

    The scene is shared read-only with every worker process; each band owns
    its own random generator and its own slice of the output buffer.
    """
    def __init__(self, scene: "Scene", workers: Optional[int] = None,
                 rows_per_band: Optional[int] = None, seed: Optional[int] = None,
                 debug_mode: bool = False):
        scene.validate()
        self.scene = scene
        self.width = scene.width
        self.height = scene.height
        self.workers = workers if workers else (os.cpu_count() or 1)
        if rows_per_band is None:
            # A few bands per worker for load balancing
            rows_per_band = max(1, self.height // (self.workers * 4))
        if rows_per_band < 1:
            raise ValueError(f"rows_per_band must be at least 1, got {rows_per_band}")
        self.rows_per_band = rows_per_band
        self.seed = seed
        self.debug_mode = debug_mode
        self.lights = find_lights(scene.objects)

    def bands(self) -> List[Tuple[int, int, int]]:
        """Returns (band_index, y_start, y_end) for every band, top to bottom."""
        return [
            (i, y_start, min(y_start + self.rows_per_band, self.height))
            for i, y_start in enumerate(range(0, self.height, self.rows_per_band))
        ]

    def render_pixels(self) -> np.ndarray:
        """
        Render the scene.

        Returns:
            (height, width, 3) uint8 array, row-major with the top row first.
        """
        pixels = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        jobs = [(i, y_start, y_end, self.seed) for i, y_start, y_end in self.bands()]

        print(f"Rendering {self.width}x{self.height}, {self.scene.samples_per_pixel} spp, "
              f"depth {self.scene.max_depth}, {len(self.scene.objects)} objects, "
              f"{len(self.lights)} lights, {len(jobs)} bands on {self.workers} workers")

        start = time.perf_counter()
        if self.workers == 1:
            for i, y_start, y_end, seed in jobs:
                band_start = time.perf_counter()
                pixels[y_start:y_end] = render_band(self.scene, self.lights, y_start, y_end,
                                                    _band_rng(seed, i))
                if self.debug_mode:
                    print(f"  Band {i} (rows {y_start}-{y_end - 1}): "
                          f"{(time.perf_counter() - band_start) * 1000:.0f}ms")
        else:
            with ProcessPoolExecutor(max_workers=self.workers, initializer=_init_worker,
                                     initargs=(self.scene, self.lights)) as executor:
                for y_start, band in executor.map(_render_band_job, jobs):
                    pixels[y_start:y_start + band.shape[0]] = band
                    if self.debug_mode:
                        print(f"  Rows {y_start}-{y_start + band.shape[0] - 1} done")
        print(f"Frame time: {(time.perf_counter() - start) * 1000:.0f}ms")
        return pixels

    def render(self, filename: str) -> np.ndarray:
        """Render the scene and write it to `filename` as a PNG."""
        pixels = self.render_pixels()
        write_image(filename, pixels)
        print(f"Image saved to {filename}")
        return pixels


def render(filename: str, scene: "Scene", **options) -> np.ndarray:
    """
    Render `scene` into `filename`. Keyword options are passed to Renderer.
    """
    return Renderer(scene, **options).render(filename)
