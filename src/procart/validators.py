"""
Validation and conversion functions for attr.
"""
import math

import numpy as np
from attrs import define
from PIL import ImageColor

from procart.exceptions import InvalidConfig

#: Largest seed accepted by the random source.
MAX_SEED = 2**32 - 1

__all__ = [
    "range_",
    "positive",
    "finite",
    "seed_",
    "enum_converter",
    "number_converter",
    "rgba_converter",
]


@define(repr=False, frozen=True)
class _RangeValidator(object):
    minimum: float
    maximum: float

    def __call__(self, inst, attr, value):
        try:
            in_range = self.minimum <= value and value <= self.maximum
        except TypeError:
            in_range = False

        if not in_range:
            raise InvalidConfig(
                "'{name}' must be in range [{minimum}, {maximum}], got {value!r}".format(
                    name=attr.name,
                    minimum=self.minimum,
                    maximum=self.maximum,
                    value=value,
                )
            )

    def __repr__(self):
        return "<range_ validator with [{minimum!r}, {maximum!r}]>".format(
            minimum=self.minimum, maximum=self.maximum
        )


def range_(minimum, maximum):
    """
    A validator that raises a :exc:`~procart.exceptions.InvalidConfig` if
    the initializer is called with a value that does not belong in the
    [minimum, maximum] range. The check is performed using
    ``minimum <= value and value <= maximum``
    """
    return _RangeValidator(minimum, maximum)


def positive(inst, attr, value):
    """A validator that rejects zero, negative and non-numeric values."""
    try:
        ok = value > 0
    except TypeError:
        ok = False
    if not ok:
        raise InvalidConfig(
            "'%s' must be greater than 0, got %r" % (attr.name, value)
        )


def enum_converter(enum_class):
    """
    Return a converter accepting either a member of ``enum_class`` or its
    value. Unknown values raise :exc:`~procart.exceptions.InvalidConfig`;
    there is no fallback member.
    """

    def _convert(value):
        if isinstance(value, enum_class):
            return value
        try:
            return enum_class(value)
        except (ValueError, TypeError):
            raise InvalidConfig(
                "Unknown %s: %r (expected one of %s)"
                % (
                    enum_class.__name__,
                    value,
                    ", ".join(repr(m.value) for m in enum_class),
                )
            ) from None

    return _convert


def rgba_converter(value):
    """
    Convert a color to an ``(r, g, b, a)`` tuple of ints in 0..255.

    Accepts CSS color strings understood by :py:mod:`PIL.ImageColor`
    (``"#ff0000"``, ``"red"``, ``"rgb(255, 0, 0)"``) and 3- or 4-tuples.
    """
    if isinstance(value, str):
        try:
            return ImageColor.getcolor(value, "RGBA")
        except ValueError as e:
            raise InvalidConfig("Invalid color %r: %s" % (value, e)) from None
    try:
        components = tuple(int(round(float(x))) for x in value)
    except (TypeError, ValueError):
        raise InvalidConfig("Invalid color %r" % (value,)) from None
    if len(components) == 3:
        components += (255,)
    if len(components) != 4 or any(not 0 <= x <= 255 for x in components):
        raise InvalidConfig("Invalid color %r" % (value,))
    return components


def number_converter(kind=float):
    """Return a converter casting to ``kind`` that raises InvalidConfig."""

    def _convert(value):
        if isinstance(value, bool):
            raise InvalidConfig("Expected a number, got %r" % (value,))
        try:
            return kind(value)
        except (TypeError, ValueError, OverflowError):
            raise InvalidConfig("Expected a number, got %r" % (value,)) from None

    return _convert


def finite(inst, attr, value):
    """A validator that rejects infinities and NaN."""
    if not math.isfinite(value):
        raise InvalidConfig("'%s' must be finite, got %r" % (attr.name, value))


def seed_(inst, attr, value):
    """
    A validator for random seeds: ``None`` or an integer in
    [0, 2**32 - 1], the range :py:class:`numpy.random.RandomState` accepts.
    """
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfig("'%s' must be an integer, got %r" % (attr.name, value))
    if not 0 <= value <= MAX_SEED:
        raise InvalidConfig(
            "'%s' must be in range [0, %d], got %r" % (attr.name, MAX_SEED, value)
        )
