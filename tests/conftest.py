"""Pytest configuration for procart tests."""

import pytest

from procart.rng import RandomSource
from procart.surface import RasterSurface


@pytest.fixture
def surface():
    """Small black surface."""
    return RasterSurface(64, 48)


@pytest.fixture
def rng():
    return RandomSource(1234)
