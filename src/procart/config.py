"""
Generation parameters.

A :py:class:`GenerationConfig` is an immutable snapshot of every control
that influences a render. Values are converted and validated when the
object is built, so an invalid configuration never reaches the pipeline::

    from procart.config import Caption, GenerationConfig, Shape

    config = GenerationConfig(
        category="nature",
        complexity=40,
        background_style="voronoi",
        particle_effect="fireflies",
        caption=Caption("Hello", font_size=48),
        shapes=[Shape("circle", 400, 300, 50, "#ff0000")],
        seed=7,
    )
"""

import logging
from typing import Optional

import numpy as np
from attrs import define, field
from PIL import Image

from procart.constants import (
    BackgroundStyle,
    Category,
    FontStyle,
    ParticleEffect,
    ShapeKind,
)
from procart.exceptions import InvalidConfig
from procart.validators import (
    enum_converter,
    finite,
    number_converter,
    positive,
    range_,
    rgba_converter,
    seed_,
)

logger = logging.getLogger(__name__)


@define(frozen=True)
class Shape(object):
    """
    User-placed shape.

    .. py:attribute:: kind

        :py:class:`~procart.constants.ShapeKind`.

    .. py:attribute:: x

        Horizontal center in pixels.

    .. py:attribute:: y

        Vertical center in pixels.

    .. py:attribute:: size

        Bounding dimension: diameter of a circle, side of a square, width
        and height of a triangle.

    .. py:attribute:: color

        ``(r, g, b, a)`` fill color.
    """

    kind: ShapeKind = field(converter=enum_converter(ShapeKind))
    x: float = field(converter=number_converter(float), validator=finite)
    y: float = field(converter=number_converter(float), validator=finite)
    size: float = field(
        converter=number_converter(float), validator=[finite, positive]
    )
    color: tuple = field(default=(0, 0, 0, 255), converter=rgba_converter)


@define(frozen=True)
class Caption(object):
    """Text drawn at the center of the surface."""

    text: str = field(converter=str)
    font_size: int = field(
        default=30, converter=number_converter(int), validator=positive
    )
    font_style: FontStyle = field(
        default=FontStyle.NORMAL, converter=enum_converter(FontStyle)
    )
    color: tuple = field(default=(255, 255, 255, 255), converter=rgba_converter)


def _to_shapes(values) -> tuple:
    shapes = []
    for value in values or ():
        if isinstance(value, Shape):
            shapes.append(value)
        elif isinstance(value, dict):
            shapes.append(Shape(**value))
        else:
            raise InvalidConfig("Expected Shape, got %s" % type(value).__name__)
    return tuple(shapes)


def _to_caption(value) -> Optional[Caption]:
    if value is None or isinstance(value, Caption):
        return value
    if isinstance(value, str):
        return Caption(value)
    if isinstance(value, dict):
        return Caption(**value)
    raise InvalidConfig("Expected Caption, got %s" % type(value).__name__)


def to_bitmap(value) -> Optional[np.ndarray]:
    """
    Convert a decoded image to a float32 ``(height, width, channels)``
    array in [0, 1] with 3 (RGB) or 4 (RGBA) channels.
    """
    if value is None:
        return None
    if isinstance(value, Image.Image):
        alpha = "A" in value.getbands() or "transparency" in value.info
        value = np.asarray(value.convert("RGBA" if alpha else "RGB"))
    if not isinstance(value, np.ndarray):
        raise InvalidConfig(
            "Inset image must be a bitmap, got %s" % type(value).__name__
        )
    if value.ndim == 2:
        value = np.repeat(value[:, :, np.newaxis], 3, axis=2)
    if value.ndim != 3 or value.shape[2] not in (3, 4):
        raise InvalidConfig("Unsupported inset image shape %s" % (value.shape,))
    if value.shape[0] == 0 or value.shape[1] == 0:
        raise InvalidConfig("Inset image is empty: %s" % (value.shape,))
    if value.dtype == np.uint8:
        return value.astype(np.float32) / 255.0
    return np.clip(value.astype(np.float32), 0.0, 1.0)


@define(frozen=True)
class GenerationConfig(object):
    """
    Immutable set of rendering parameters.

    .. py:attribute:: category

        :py:class:`~procart.constants.Category` of the auto shapes.

    .. py:attribute:: complexity

        Integer in [0, 100]; controls the number of auto shapes.

    .. py:attribute:: background_style

        :py:class:`~procart.constants.BackgroundStyle`.

    .. py:attribute:: particle_effect

        :py:class:`~procart.constants.ParticleEffect`.

    .. py:attribute:: glow_intensity

        Glow blur radius in [0, 20] applied to the caption.

    .. py:attribute:: animation_phase

        Phase in radians of the animation tint.

    .. py:attribute:: caption

        Optional :py:class:`Caption`.

    .. py:attribute:: inset_image

        Optional decoded bitmap drawn last, see :py:func:`to_bitmap`.

    .. py:attribute:: shapes

        Tuple of :py:class:`Shape` drawn after the auto shapes.

    .. py:attribute:: seed

        Seed of the default random source. ``None`` is not reproducible.
    """

    category: Category = field(
        default=Category.GEOMETRIC, converter=enum_converter(Category)
    )
    complexity: int = field(default=50, validator=range_(0, 100))
    background_style: BackgroundStyle = field(
        default=BackgroundStyle.GRADIENT, converter=enum_converter(BackgroundStyle)
    )
    particle_effect: ParticleEffect = field(
        default=ParticleEffect.NONE, converter=enum_converter(ParticleEffect)
    )
    glow_intensity: float = field(default=0.0, validator=range_(0, 20))
    animation_phase: float = field(
        default=0.0, converter=number_converter(float), validator=finite
    )
    caption: Optional[Caption] = field(default=None, converter=_to_caption)
    inset_image: Optional[np.ndarray] = field(
        default=None, converter=to_bitmap, eq=False, repr=False
    )
    shapes: tuple = field(factory=tuple, converter=_to_shapes)
    seed: Optional[int] = field(default=None, validator=seed_)

    @complexity.validator
    def _validate_complexity(self, attribute, value):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidConfig("'complexity' must be an integer, got %r" % (value,))

    @property
    def has_inset_image(self) -> bool:
        return self.inset_image is not None
