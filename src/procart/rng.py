"""Seedable uniform random source shared by every generator of a render."""

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


class RandomSource(object):
    """
    Uniform generator of floats in [0, 1).

    Draws are consumed strictly in call order, so two sources built with the
    same seed and used by the same sequence of generators produce identical
    renders. ``seed=None`` seeds from OS entropy.

    Example::

        rng = RandomSource(42)
        x = rng.random() * width
    """

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._state = np.random.RandomState(seed)

    def __repr__(self) -> str:
        return "%s(seed=%r)" % (self.__class__.__name__, self._seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        return float(self._state.random_sample())

    def uniform(self, low: float, high: float) -> float:
        """Return a float in [low, high) using one draw."""
        return self.random() * (high - low) + low

    def hue(self) -> float:
        """Return a hue in [0, 360) using one draw."""
        return self.random() * 360.0
