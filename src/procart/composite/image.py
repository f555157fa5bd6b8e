"""
Inset image placement.

The inset bitmap is scaled uniformly to fit the surface, centered, and
drawn last. Its bounding rectangle is also the exclusion zone: shapes and
particles anchored inside it are not drawn at all.
"""

import logging
from typing import Callable, Optional

import numpy as np

from procart.utils import fit_rect

logger = logging.getLogger(__name__)


def inset_bbox(
    surface_size: tuple[int, int], image: np.ndarray
) -> tuple[float, float, float, float]:
    """
    Return ``(left, top, right, bottom)`` of the scaled, centered image.

    ``scale = min(surface_width / image_width, surface_height / image_height)``
    """
    height, width = image.shape[:2]
    return fit_rect(surface_size, (width, height))


def exclusion_zone(
    surface_size: tuple[int, int], image: Optional[np.ndarray]
) -> Callable[[float, float], bool]:
    """
    Return a predicate telling whether a point lies in the inset rectangle.

    Bounds are inclusive. Without an image nothing is excluded.
    """
    if image is None:
        return lambda x, y: False

    left, top, right, bottom = inset_bbox(surface_size, image)

    def _exclude(x: float, y: float) -> bool:
        return left <= x <= right and top <= y <= bottom

    return _exclude


def draw_inset_image(surface, image: Optional[np.ndarray]) -> None:
    """Blit ``image`` on top of everything. No-op without an image."""
    if image is None:
        return
    bbox = inset_bbox(surface.size, image)
    logger.debug(
        "Inset %dx%d at (%.1f, %.1f, %.1f, %.1f)"
        % ((image.shape[1], image.shape[0]) + bbox)
    )
    surface.blit(image, bbox)
