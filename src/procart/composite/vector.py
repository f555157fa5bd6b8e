"""
Vector shapes for compositing.

Shapes are described as SVG-like path symbols and rasterized by the
surface. Two groups are drawn:

- auto shapes, whose geometry follows the :py:class:`~procart.constants.Category`
  and whose position and colors come from the random source;
- user shapes, placed explicitly by :py:class:`~procart.config.Shape`.

Every shape is filled and then outlined with a 1px black stroke. A shape
whose anchor point falls inside the exclusion zone is skipped entirely.
"""

import logging
from typing import Callable, Iterable

from procart.constants import (
    OUTLINE_COLOR,
    OUTLINE_WIDTH,
    Category,
    ShapeKind,
)
from procart.exceptions import InvalidConfig

logger = logging.getLogger(__name__)

#: Cubic bezier handle length for a quarter circle.
KAPPA = 0.5522847498307936

#: Opacity of auto shape fills.
AUTO_SHAPE_OPACITY = 0.5


class Path(object):
    """
    Path builder producing an aggdraw symbol string.

    Example::

        path = Path().move_to(0, 0).line_to(10, 10)
        surface.stroke_path(path.symbol, (0, 0, 0), bbox=path.bbox)
    """

    def __init__(self):
        self._tokens: list = []
        self._xs: list = []
        self._ys: list = []

    def __repr__(self) -> str:
        return "Path(%r)" % self.symbol

    def _add(self, command: str, *points: float) -> "Path":
        self._tokens.append(command)
        for x, y in zip(points[::2], points[1::2]):
            self._tokens.append("%.4f %.4f" % (x, y))
            self._xs.append(x)
            self._ys.append(y)
        return self

    def move_to(self, x: float, y: float) -> "Path":
        return self._add("M", x, y)

    def line_to(self, x: float, y: float) -> "Path":
        return self._add("L", x, y)

    def curve_to(
        self, x1: float, y1: float, x2: float, y2: float, x: float, y: float
    ) -> "Path":
        return self._add("C", x1, y1, x2, y2, x, y)

    def close(self) -> "Path":
        self._tokens.append("Z")
        return self

    def arc(self, cx: float, cy: float, radius: float) -> "Path":
        """
        Full circle as four cubic segments, clockwise from the 3 o'clock
        point. When the path already has a current point, a line joins it
        to the start of the circle.
        """
        k = KAPPA * radius
        if self._tokens:
            self.line_to(cx + radius, cy)
        else:
            self.move_to(cx + radius, cy)
        self.curve_to(cx + radius, cy + k, cx + k, cy + radius, cx, cy + radius)
        self.curve_to(cx - k, cy + radius, cx - radius, cy + k, cx - radius, cy)
        self.curve_to(cx - radius, cy - k, cx - k, cy - radius, cx, cy - radius)
        self.curve_to(cx + k, cy - radius, cx + radius, cy - k, cx + radius, cy)
        return self

    @property
    def symbol(self) -> str:
        return " ".join(self._tokens)

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """Bounds of all points, control points included."""
        if not self._xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(self._xs), min(self._ys), max(self._xs), max(self._ys))


def circle_path(cx: float, cy: float, radius: float) -> Path:
    return Path().arc(cx, cy, radius)


def rect_path(left: float, top: float, width: float, height: float) -> Path:
    return (
        Path()
        .move_to(left, top)
        .line_to(left + width, top)
        .line_to(left + width, top + height)
        .line_to(left, top + height)
        .close()
    )


def triangle_path(cx: float, cy: float, size: float) -> Path:
    """Isosceles triangle with apex up inside a ``size`` square."""
    half = size / 2.0
    return (
        Path()
        .move_to(cx, cy - half)
        .line_to(cx - half, cy + half)
        .line_to(cx + half, cy + half)
        .close()
    )


def tree_path(x: float, y: float) -> Path:
    """Trunk from ``(x, y)`` 50px up, crowned by a circle of radius 20."""
    return Path().move_to(x, y).line_to(x, y - 50).arc(x, y - 70, 20)


def auto_shape_count(complexity: int) -> int:
    """Number of auto shapes for a complexity in [0, 100]."""
    return int(complexity) // 10 + 5


def _geometric(x, y, width, height, rng) -> Path:
    size = rng.uniform(50, 150)
    return rect_path(x, y, size, size)


def _abstract(x, y, width, height, rng) -> Path:
    points = [rng.random() * (width if i % 2 == 0 else height) for i in range(6)]
    return Path().move_to(x, y).curve_to(*points)


def _futuristic(x, y, width, height, rng) -> Path:
    return circle_path(x, y, rng.uniform(10, 60))


def _nature(x, y, width, height, rng) -> Path:
    return tree_path(x, y)


def _minimalist(x, y, width, height, rng) -> Path:
    return Path().move_to(x, y).line_to(rng.random() * width, rng.random() * height)


AUTO_SHAPE_FUNC = {
    Category.GEOMETRIC: _geometric,
    Category.ABSTRACT: _abstract,
    Category.FUTURISTIC: _futuristic,
    Category.NATURE: _nature,
    Category.MINIMALIST: _minimalist,
}

USER_SHAPE_FUNC = {
    ShapeKind.CIRCLE: lambda s: circle_path(s.x, s.y, s.size / 2.0),
    ShapeKind.SQUARE: lambda s: rect_path(
        s.x - s.size / 2.0, s.y - s.size / 2.0, s.size, s.size
    ),
    ShapeKind.TRIANGLE: lambda s: triangle_path(s.x, s.y, s.size),
}


def draw_shape(surface, path: Path, color, opacity: float = 1.0) -> None:
    """Fill ``path`` and outline it."""
    bbox = path.bbox
    surface.fill_path(path.symbol, color, opacity=opacity, bbox=bbox)
    surface.stroke_path(path.symbol, OUTLINE_COLOR, width=OUTLINE_WIDTH, bbox=bbox)


def draw_auto_shapes(
    surface,
    category: Category,
    complexity: int,
    exclude: Callable[[float, float], bool],
    rng,
) -> int:
    """
    Draw the category-styled auto shapes and return how many were drawn.

    A candidate inside the exclusion zone is dropped without consuming
    further random numbers; it is not resampled.
    """
    func = AUTO_SHAPE_FUNC.get(category)
    if func is None:
        raise InvalidConfig("Unknown category: %r" % (category,))

    width, height = surface.size
    count = auto_shape_count(complexity)
    drawn = 0
    for i in range(count):
        x = rng.random() * width
        y = rng.random() * height
        if exclude(x, y):
            logger.debug("Skip auto shape %d at (%.1f, %.1f)" % (i, x, y))
            continue
        path = func(x, y, width, height, rng)
        color = (rng.random() * 255, rng.random() * 255, rng.random() * 255, 255)
        draw_shape(surface, path, color, opacity=AUTO_SHAPE_OPACITY)
        drawn += 1
    logger.debug("Drew %d of %d %s shapes" % (drawn, count, category.value))
    return drawn


def draw_user_shapes(
    surface, shapes: Iterable, exclude: Callable[[float, float], bool]
) -> int:
    """Draw :py:class:`~procart.config.Shape` objects in order, fully opaque."""
    drawn = 0
    for shape in shapes:
        if exclude(shape.x, shape.y):
            logger.debug("Skip %s at (%.1f, %.1f)" % (shape.kind.value, shape.x, shape.y))
            continue
        path = USER_SHAPE_FUNC[shape.kind](shape)
        draw_shape(surface, path, shape.color[:3] + (255,))
        drawn += 1
    return drawn
