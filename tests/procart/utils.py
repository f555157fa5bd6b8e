import numpy as np


def solid_image(width, height, color, alpha=None):
    """Float RGB(A) bitmap filled with ``color`` in 0..255."""
    channels = 3 if alpha is None else 4
    image = np.empty((height, width, channels), dtype=np.float32)
    image[:, :, :3] = np.array(color, dtype=np.float32) / 255.0
    if alpha is not None:
        image[:, :, 3] = alpha
    return image


def is_color(pixel, color, atol=1e-3):
    return np.allclose(pixel, np.array(color, dtype=np.float32) / 255.0, atol=atol)
