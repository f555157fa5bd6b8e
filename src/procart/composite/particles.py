"""Particle overlays: small translucent dots scattered over the surface."""

import logging
from typing import Callable

from procart.composite.vector import circle_path
from procart.constants import PARTICLE_COUNT, ParticleEffect
from procart.exceptions import InvalidConfig

logger = logging.getLogger(__name__)

#: Maximum radius and color of each effect.
PARTICLE_STYLE = {
    ParticleEffect.STARDUST: (2.0, (255, 255, 255, 255)),
    ParticleEffect.FIREFLIES: (3.0, (255, 255, 0, 255)),
}


def particle_alpha(value: float) -> float:
    """Map a uniform draw in [0, 1) to an alpha in [0.5, 1.0)."""
    return value * 0.5 + 0.5


def scatter_particles(
    surface,
    effect: ParticleEffect,
    exclude: Callable[[float, float], bool],
    rng,
    count: int = PARTICLE_COUNT,
) -> int:
    """
    Scatter ``count`` candidate particles and return how many were drawn.

    Candidates inside the exclusion zone are dropped, not resampled.
    """
    if effect == ParticleEffect.NONE:
        return 0
    if effect not in PARTICLE_STYLE:
        raise InvalidConfig("Unknown particle effect: %r" % (effect,))

    max_radius, color = PARTICLE_STYLE[effect]
    width, height = surface.size
    drawn = 0
    for _ in range(count):
        x = rng.random() * width
        y = rng.random() * height
        if exclude(x, y):
            continue
        radius = rng.random() * max_radius
        alpha = particle_alpha(rng.random())
        path = circle_path(x, y, radius)
        surface.fill_path(path.symbol, color, opacity=alpha, bbox=path.bbox)
        drawn += 1
    logger.debug("Scattered %d of %d %s particles" % (drawn, count, effect.value))
    return drawn
