"""Color helpers for the generators."""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from skimage.color import hsv2rgb  # type: ignore[import-untyped]


def hsl_to_rgb(hue: ArrayLike) -> NDArray[np.float32]:
    """
    Convert hues in degrees to fully saturated, half-lightness RGB.

    ``hsl(h, 100%, 50%)`` equals ``hsv(h, 100%, 100%)``, so the conversion
    goes through :py:func:`skimage.color.hsv2rgb`. Hues wrap modulo 360,
    so -180 is cyan and 360 is red.
    The result has the shape of ``hue`` plus a trailing axis of 3.
    """
    hue = np.mod(np.asarray(hue, dtype=np.float64), 360.0)
    flat = hue.reshape(-1, 1)
    hsv = np.stack(
        (flat / 360.0, np.ones_like(flat), np.ones_like(flat)), axis=-1
    )
    rgb = hsv2rgb(hsv)
    return rgb.reshape(hue.shape + (3,)).astype(np.float32)
