# materials/texture_loader.py
import os
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from pathtracer.materials.textures import ImageTexture


def load_texture_image(image_path: str) -> Tuple[np.ndarray, int, int]:
    """
    Decode an image file into an RGB8 pixel buffer.

    Args:
        image_path: Path to the image file

    Returns:
        (pixels, width, height) where pixels is a (height, width, 3) uint8 array

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image cannot be decoded
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            pixels = np.array(img, dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    height, width = pixels.shape[:2]
    return pixels, width, height


def load_texture(image_path: str, h_offset: float = 0.0) -> ImageTexture:
    """
    Load an image file as a texture.

    Args:
        image_path: Path to the image file
        h_offset: Initial horizontal rotation of the texture

    Returns:
        ImageTexture object
    """
    pixels, width, height = load_texture_image(image_path)
    print(f"{image_path} loaded ({width}x{height})")
    return ImageTexture(pixels, width, height, h_offset=h_offset, path=image_path)
