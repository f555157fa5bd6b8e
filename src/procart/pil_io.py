"""
PIL IO module.

Conversions between Pillow images and the float arrays used by the
surface. Decoding image files lives here so the generation core never
touches file formats.
"""
import logging

import numpy as np
from PIL import Image

from procart.config import to_bitmap

logger = logging.getLogger(__name__)


def array_to_pil(color: np.ndarray) -> Image.Image:
    """Convert a float ``(height, width, 3|4)`` array in [0, 1] to PIL."""
    mode = {3: "RGB", 4: "RGBA"}.get(color.shape[2])
    assert mode is not None, "Unsupported channel count %d" % color.shape[2]
    pixels = np.round(255 * np.clip(color, 0.0, 1.0)).astype(np.uint8)
    return Image.fromarray(pixels, mode)


def load_image(path) -> np.ndarray:
    """Decode an image file into an inset bitmap."""
    with Image.open(path) as image:
        image.load()
        logger.debug("Loaded %s: %s %dx%d" % (path, image.mode, *image.size))
        return to_bitmap(image)


def save_image(surface, path, **kwargs) -> None:
    """Encode the surface pixels into an image file."""
    image = surface.topil()
    image.save(path, **kwargs)
    logger.debug("Saved %s" % (path,))
