# materials/textures.py
from typing import Optional, Union

import numpy as np

from pathtracer.core.vector import Vector3


class ImageTexture:
    """
    A pre-decoded RGB8 image used for nearest-pixel lookups.

    `pixels` is either a (height, width, 3) uint8 array or packed RGB bytes,
    row-major with the top row first. `h_offset` rotates the texture
    horizontally, in units of the full width.
    """
    def __init__(self, pixels: Union[np.ndarray, bytes], width: int, height: int,
                 h_offset: float = 0.0, path: Optional[str] = None):
        if isinstance(pixels, (bytes, bytearray, memoryview)):
            pixels = np.frombuffer(pixels, dtype=np.uint8)
        self.pixels = np.asarray(pixels, dtype=np.uint8).reshape(height, width, 3)
        self.pixels.flags.writeable = False
        self.width = width
        self.height = height
        self.h_offset = h_offset
        self.path = path

    def pixel(self, x: int, y: int) -> Vector3:
        """Returns the texel at column x, row y as a color in [0, 1]."""
        r, g, b = self.pixels[y, x]
        return Vector3(r / 255.0, g / 255.0, b / 255.0)

    def sample(self, u: float, v: float) -> Vector3:
        """Sample the texture at the given surface coordinates."""
        rot = (u + self.h_offset) % 1.0
        x = min(int(rot * self.width), self.width - 1)
        y = min(max(int((1.0 - v) * (self.height - 1)), 0), self.height - 1)
        return self.pixel(x, y)

    def rotated(self, rot: float) -> "ImageTexture":
        return ImageTexture(self.pixels, self.width, self.height,
                            self.h_offset + rot, self.path)

    def __repr__(self) -> str:
        source = self.path if self.path else "<memory>"
        return f"ImageTexture({source}, {self.width}x{self.height}, h_offset={self.h_offset})"
