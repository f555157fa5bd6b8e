import logging

import numpy as np
import pytest

from procart.composite.vector import (
    AUTO_SHAPE_FUNC,
    Path,
    auto_shape_count,
    circle_path,
    draw_auto_shapes,
    draw_user_shapes,
    rect_path,
    tree_path,
    triangle_path,
)
from procart.config import Shape
from procart.constants import Category
from procart.exceptions import InvalidConfig
from procart.rng import RandomSource
from procart.surface import RasterSurface

from ..utils import is_color

logger = logging.getLogger(__name__)


def _never(x, y):
    return False


def _always(x, y):
    return True


@pytest.mark.parametrize(
    "complexity, expected",
    [(0, 5), (1, 5), (9, 5), (10, 6), (55, 10), (99, 14), (100, 15)],
)
def test_auto_shape_count(complexity, expected):
    assert auto_shape_count(complexity) == expected


def test_path_symbol():
    path = Path().move_to(0, 0).line_to(10, 5.5).close()
    assert path.symbol == "M 0.0000 0.0000 L 10.0000 5.5000 Z"
    assert path.bbox == (0, 0, 10, 5.5)
    assert Path().bbox == (0.0, 0.0, 0.0, 0.0)


def test_circle_path():
    path = circle_path(50, 40, 10)
    assert path.symbol.startswith("M 60.0000 40.0000 C")
    assert path.symbol.count("C") == 4
    assert path.bbox == (40, 30, 60, 50)


def test_rect_and_triangle():
    assert rect_path(1, 2, 3, 4).bbox == (1, 2, 4, 6)
    assert triangle_path(10, 10, 4).bbox == (8, 8, 12, 12)


def test_tree_path():
    path = tree_path(100, 200)
    assert path.symbol.startswith("M 100.0000 200.0000 L 100.0000 150.0000 L")
    assert path.bbox == (80, 110, 120, 200)


@pytest.mark.parametrize("category", list(Category))
def test_draw_auto_shapes(category):
    surface = RasterSurface(200, 150, color=(255, 255, 255))
    drawn = draw_auto_shapes(surface, category, 50, _never, RandomSource(21))
    assert drawn == 10
    assert surface.numpy().min() < 1.0


@pytest.mark.parametrize("category", list(Category))
def test_draw_auto_shapes_excluded(category):
    surface = RasterSurface(200, 150)
    rng = RandomSource(21)
    drawn = draw_auto_shapes(surface, category, 100, _always, rng)
    assert drawn == 0
    assert np.all(surface.numpy() == 0.0)
    # Each skipped candidate only consumes its position.
    reference = RandomSource(21)
    for _ in range(30):
        reference.random()
    assert rng.random() == reference.random()


def test_draw_auto_shapes_deterministic():
    first = RasterSurface(120, 90)
    second = RasterSurface(120, 90)
    draw_auto_shapes(first, Category.ABSTRACT, 30, _never, RandomSource(2))
    draw_auto_shapes(second, Category.ABSTRACT, 30, _never, RandomSource(2))
    assert np.array_equal(first.numpy(), second.numpy())


def test_draw_auto_shapes_unknown_category(surface, rng):
    with pytest.raises(InvalidConfig):
        draw_auto_shapes(surface, "rococo", 50, _never, rng)


def test_draw_user_shapes():
    surface = RasterSurface(200, 150)
    shapes = [
        Shape("circle", 50, 50, 40, "red"),
        Shape("square", 150, 50, 40, "lime"),
        Shape("triangle", 100, 110, 40, "blue"),
    ]
    assert draw_user_shapes(surface, shapes, _never) == 3
    pixels = surface.numpy()
    assert is_color(pixels[50, 50], (255, 0, 0))
    assert is_color(pixels[50, 150], (0, 255, 0))
    assert is_color(pixels[112, 100], (0, 0, 255))
    assert is_color(pixels[5, 100], (0, 0, 0))


def test_draw_user_shapes_outline():
    surface = RasterSurface(100, 100, color=(255, 255, 255))
    draw_user_shapes(surface, [Shape("square", 50, 50, 40, "white")], _never)
    # The 1px black outline darkens the square edge.
    assert surface.numpy()[29:31, 50].min() < 0.9
    assert is_color(surface.numpy()[50, 50], (255, 255, 255))


def test_draw_user_shapes_excluded():
    surface = RasterSurface(100, 100)
    shapes = [Shape("circle", 20, 20, 10, "red"), Shape("circle", 80, 80, 10, "red")]
    drawn = draw_user_shapes(surface, shapes, lambda x, y: x > 50)
    assert drawn == 1
    pixels = surface.numpy()
    assert is_color(pixels[20, 20], (255, 0, 0))
    assert is_color(pixels[80, 80], (0, 0, 0))


def test_user_shapes_are_opaque():
    surface = RasterSurface(100, 100)
    draw_user_shapes(surface, [Shape("circle", 50, 50, 40, "#ff000040")], _never)
    assert is_color(surface.numpy()[50, 50], (255, 0, 0))


def test_auto_shape_sizes():
    reference = RandomSource(17)
    side = reference.random() * 100 + 50
    radius = reference.random() * 50 + 10

    rng = RandomSource(17)
    square = AUTO_SHAPE_FUNC[Category.GEOMETRIC](10, 20, 400, 300, rng)
    assert square.bbox == pytest.approx((10, 20, 10 + side, 20 + side))
    circle = AUTO_SHAPE_FUNC[Category.FUTURISTIC](100, 100, 400, 300, rng)
    assert circle.bbox == pytest.approx(
        (100 - radius, 100 - radius, 100 + radius, 100 + radius)
    )
