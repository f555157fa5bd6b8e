import logging

import numpy as np
import pytest

from procart.composite.particles import particle_alpha, scatter_particles
from procart.constants import ParticleEffect
from procart.exceptions import InvalidConfig
from procart.rng import RandomSource
from procart.surface import RasterSurface

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("value, expected", [(0.0, 0.5), (0.5, 0.75), (0.999, 0.9995)])
def test_particle_alpha(value, expected):
    assert particle_alpha(value) == pytest.approx(expected)


def test_no_particles(surface):
    rng = RandomSource(3)
    assert scatter_particles(surface, ParticleEffect.NONE, lambda x, y: False, rng) == 0
    assert np.all(surface.numpy() == 0.0)
    assert rng.random() == RandomSource(3).random()


@pytest.mark.parametrize("effect", [ParticleEffect.STARDUST, ParticleEffect.FIREFLIES])
def test_scatter_particles(effect):
    surface = RasterSurface(200, 150)
    drawn = scatter_particles(surface, effect, lambda x, y: False, RandomSource(6))
    assert drawn == 100
    assert surface.numpy().max() > 0.0


def test_fireflies_are_yellow():
    surface = RasterSurface(200, 150)
    scatter_particles(
        surface, ParticleEffect.FIREFLIES, lambda x, y: False, RandomSource(6)
    )
    pixels = surface.numpy()
    assert pixels[:, :, :2].max() > 0.0
    assert np.all(pixels[:, :, 2] == 0.0)


def test_particles_excluded(surface):
    rng = RandomSource(6)
    drawn = scatter_particles(surface, ParticleEffect.STARDUST, lambda x, y: True, rng)
    assert drawn == 0
    assert np.all(surface.numpy() == 0.0)
    reference = RandomSource(6)
    for _ in range(200):
        reference.random()
    assert rng.random() == reference.random()


def test_particles_half_excluded():
    surface = RasterSurface(200, 150)
    drawn = scatter_particles(
        surface,
        ParticleEffect.STARDUST,
        lambda x, y: x < 100,
        RandomSource(6),
        count=50,
    )
    assert 0 < drawn < 50
    # Stardust radius is below 2, so nothing left of x = 98 is covered.
    assert np.all(surface.numpy()[:, :97] == 0.0)


def test_unknown_effect(surface, rng):
    with pytest.raises(InvalidConfig):
        scatter_particles(surface, "snow", lambda x, y: False, rng)
