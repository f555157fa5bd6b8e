"""Geometry and array helpers shared by the surface and the generators."""

from typing import Iterator

import numpy as np
from numpy.typing import NDArray


def intersect(
    a: tuple[int, int, int, int], b: tuple[int, int, int, int]
) -> tuple[int, int, int, int]:
    """Calculate intersection of two bounding boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter


def fit_rect(
    container: tuple[int, int], content: tuple[int, int]
) -> tuple[float, float, float, float]:
    """
    Return ``(left, top, right, bottom)`` of ``content`` (width, height)
    uniformly scaled to fit inside ``container`` and centered.
    """
    scale = min(
        float(container[0]) / content[0], float(container[1]) / content[1]
    )
    width = content[0] * scale
    height = content[1] * scale
    left = (container[0] - width) / 2.0
    top = (container[1] - height) / 2.0
    return (left, top, left + width, top + height)


def row_tiles(
    viewport: tuple[int, int, int, int], count: int
) -> Iterator[tuple[int, int, int, int]]:
    """Split ``viewport`` into at most ``count`` horizontal bands."""
    left, top, right, bottom = viewport
    count = max(1, min(int(count), bottom - top))
    edges = np.linspace(top, bottom, count + 1).round().astype(int)
    for start, stop in zip(edges[:-1], edges[1:]):
        if stop > start:
            yield (left, int(start), right, int(stop))


def clip(x: NDArray[np.floating]) -> NDArray[np.floating]:
    """Clip between [0, 1]."""
    return np.clip(x, 0.0, 1.0)
