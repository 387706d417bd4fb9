# renderer/tone_mapping.py
import math

import numpy as np
from numba import njit


@njit
def gamma_correct(accumulated, samples):
    """
    Convert accumulated linear color sums to 8-bit values.

    Each channel is averaged over `samples`, gamma corrected with a square
    root, clamped to [0, 1] and rounded to the nearest byte. NaN channels
    come out black.

    Args:
        accumulated: (..., 3) float64 array of per-pixel channel sums.
        samples: Number of samples that went into each sum.

    Returns:
        uint8 array with the same shape as `accumulated`.
    """
    flat = accumulated.reshape(-1)
    out = np.empty(flat.shape[0], dtype=np.uint8)
    scale = 1.0 / samples
    for i in range(flat.shape[0]):
        c = flat[i] * scale
        if c != c or c <= 0.0:
            out[i] = 0
            continue
        c = math.sqrt(c)
        if c > 1.0:
            c = 1.0
        out[i] = np.uint8(int(c * 255.0 + 0.5))
    return out.reshape(accumulated.shape)
