"""
Background generation.

The background is the first layer of a render and overwrites every pixel
of the surface. Four patterns are available, see
:py:class:`~procart.constants.BackgroundStyle`:

- **gradient**: diagonal two-stop linear gradient between random hues.
- **fractal**: Mandelbrot escape-time coloring.
- **voronoi**: nearest-seed partition over random colored seeds.
- **flow**: hue of a continuous sine/cosine vector field.

All per-pixel colors use ``hsl(hue, 100%, 50%)``. Hues are in degrees and
wrap around the color wheel; the flow field spans [-180, 540].

Randomness is drawn once, up front, by :py:func:`draw_background`. The
per-pixel work is then a pure function of a viewport
``(left, top, right, bottom)``, so rows can be computed in independent
tiles::

    color = draw_fractal((0, 0, 800, 600), size=(800, 600))
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Optional, Sequence

import numpy as np
from attrs import define

from procart.composite.utils import hsl_to_rgb
from procart.constants import (
    FLOW_FIELD_SCALE,
    FRACTAL_ESCAPE_RADIUS_SQUARED,
    FRACTAL_MAX_ITERATIONS,
    VORONOI_SEEDS,
    BackgroundStyle,
)
from procart.exceptions import InvalidConfig
from procart.utils import row_tiles

logger = logging.getLogger(__name__)

Viewport = tuple[int, int, int, int]


@define(frozen=True)
class VoronoiSeed(object):
    """Voronoi site with its hue in degrees."""

    x: float
    y: float
    hue: float


def draw_background(
    surface,
    style: BackgroundStyle,
    rng,
    max_workers: Optional[int] = None,
) -> None:
    """
    Paint the background pattern over the whole surface.

    :param surface: :py:class:`~procart.surface.RasterSurface`.
    :param style: :py:class:`~procart.constants.BackgroundStyle`.
    :param rng: :py:class:`~procart.rng.RandomSource`.
    :param max_workers: Number of threads computing row tiles. ``None`` or
        1 computes everything in the calling thread.
    """
    size = surface.size
    if style == BackgroundStyle.GRADIENT:
        hues = (rng.hue(), rng.hue())
        logger.debug("Gradient hues: %.2f -> %.2f" % hues)
        draw = partial(draw_gradient_fill, size=size, hues=hues)
    elif style == BackgroundStyle.FRACTAL:
        draw = partial(draw_fractal, size=size)
    elif style == BackgroundStyle.VORONOI:
        seeds = make_voronoi_seeds(size, rng)
        draw = partial(draw_voronoi, seeds=seeds)
    elif style == BackgroundStyle.FLOW_FIELD:
        draw = draw_flow_field
    else:
        raise InvalidConfig("Unknown background style: %r" % (style,))

    logger.debug("Drawing %s background %dx%d" % (style.value, size[0], size[1]))
    _draw_tiles(surface, draw, max_workers)


def _draw_tiles(
    surface, draw: Callable[[Viewport], np.ndarray], max_workers: Optional[int]
) -> None:
    if not max_workers or max_workers <= 1:
        surface.paste(surface.viewbox, draw(surface.viewbox))
        return

    tiles = list(row_tiles(surface.viewbox, max_workers * 4))
    logger.debug("Drawing %d tiles with %d workers" % (len(tiles), max_workers))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for tile, color in zip(tiles, executor.map(draw, tiles)):
            surface.paste(tile, color)


def _grid(viewport: Viewport, offset: float = 0.0):
    left, top, right, bottom = viewport
    return np.meshgrid(
        np.arange(left, right, dtype=np.float64) + offset,
        np.arange(top, bottom, dtype=np.float64) + offset,
    )


def draw_gradient_fill(
    viewport: Viewport, size: tuple[int, int], hues: Sequence[float]
) -> np.ndarray:
    """
    Diagonal linear gradient from ``hues[0]`` at the top-left corner to
    ``hues[-1]`` at the bottom-right corner.
    """
    from scipy import interpolate  # type: ignore[import-untyped]

    X, Y = _grid(viewport, 0.5)
    Z = _make_diagonal_gradient(X, Y, size)
    stops = hsl_to_rgb(np.asarray(hues, dtype=np.float64))
    locations = np.linspace(0.0, 1.0, len(stops))
    G = interpolate.interp1d(
        locations,
        stops,
        axis=0,
        bounds_error=False,
        fill_value=(stops[0], stops[-1]),
    )
    return G(Z).astype(np.float32)


def _make_diagonal_gradient(X, Y, size):
    """Project pixel centers onto the (0, 0) -> (width, height) diagonal."""
    width, height = size
    Z = (X * width + Y * height) / float(width * width + height * height)
    return np.clip(Z, 0.0, 1.0)


def fractal_hues(
    viewport: Viewport,
    size: tuple[int, int],
    max_iterations: int = FRACTAL_MAX_ITERATIONS,
) -> np.ndarray:
    """
    Mandelbrot escape-time hues in degrees.

    Each pixel maps to ``c = a0 + b0 i`` with
    ``a0 = (px - w/2) * 4 / w`` and ``b0 = (py - h/2) * 4 / h``. Starting
    from ``z = c``, ``z = z^2 + c`` is iterated until ``|z|^2 > 16`` or
    ``max_iterations`` steps; the escaping step is not counted. Pixels leave
    the working set as soon as they escape.
    """
    width, height = size
    px, py = _grid(viewport)
    ca = ((px - width / 2) * 4 / width).ravel()
    cb = ((py - height / 2) * 4 / height).ravel()

    counts = np.zeros(ca.size, dtype=np.int32)
    index = np.arange(ca.size)
    a, b = ca.copy(), cb.copy()
    for _ in range(max_iterations):
        if index.size == 0:
            break
        next_a = a * a - b * b + ca[index]
        next_b = 2 * a * b + cb[index]
        alive = ~(next_a * next_a + next_b * next_b > FRACTAL_ESCAPE_RADIUS_SQUARED)
        index = index[alive]
        counts[index] += 1
        a, b = next_a[alive], next_b[alive]

    hues = counts / max_iterations * 360
    return hues.reshape(px.shape)


def draw_fractal(viewport: Viewport, size: tuple[int, int]) -> np.ndarray:
    """Escape-time fractal background."""
    return hsl_to_rgb(fractal_hues(viewport, size))


def make_voronoi_seeds(
    size: tuple[int, int], rng, count: int = VORONOI_SEEDS
) -> list[VoronoiSeed]:
    """Draw ``count`` seeds; each takes x, y and hue from ``rng`` in order."""
    width, height = size
    seeds = []
    for _ in range(count):
        x = rng.random() * width
        y = rng.random() * height
        seeds.append(VoronoiSeed(x, y, rng.hue()))
    return seeds


def voronoi_indices(viewport: Viewport, seeds: Sequence[VoronoiSeed]) -> np.ndarray:
    """
    Index of the nearest seed for every pixel.

    Linear scan in seed order with a strict comparison, so the first seed
    wins ties.
    """
    assert len(seeds) > 0, "At least one Voronoi seed is required"
    X, Y = _grid(viewport)
    nearest = np.zeros(X.shape, dtype=np.intp)
    best = np.full(X.shape, np.inf)
    for i, seed in enumerate(seeds):
        distance = np.hypot(X - seed.x, Y - seed.y)
        closer = distance < best
        nearest[closer] = i
        best[closer] = distance[closer]
    return nearest


def draw_voronoi(viewport: Viewport, seeds: Sequence[VoronoiSeed]) -> np.ndarray:
    """Voronoi background; every pixel takes exactly one seed color."""
    colors = hsl_to_rgb([seed.hue for seed in seeds])
    return colors[voronoi_indices(viewport, seeds)]


def flow_field_hues(viewport: Viewport) -> np.ndarray:
    """Hue in degrees of ``angle = (sin(0.01 px) + cos(0.01 py)) * pi``."""
    X, Y = _grid(viewport)
    angle = (np.sin(X * FLOW_FIELD_SCALE) + np.cos(Y * FLOW_FIELD_SCALE)) * np.pi
    return (angle + np.pi) / (2 * np.pi) * 360


def draw_flow_field(viewport: Viewport) -> np.ndarray:
    """Flow field background. Needs no randomness."""
    return hsl_to_rgb(flow_field_hues(viewport))
