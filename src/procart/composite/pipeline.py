"""Generation pipeline: runs every layer in a fixed order on one surface."""

import logging
from typing import Callable, Optional

import attrs

from procart.composite.background import draw_background
from procart.composite.effects import draw_animation_tint, draw_caption
from procart.composite.image import draw_inset_image, exclusion_zone
from procart.composite.particles import scatter_particles
from procart.composite.vector import draw_auto_shapes, draw_user_shapes
from procart.config import GenerationConfig
from procart.exceptions import InvalidConfig, SurfaceUnavailable
from procart.rng import RandomSource
from procart.surface import RasterSurface

logger = logging.getLogger(__name__)


def render(
    config: GenerationConfig,
    surface: RasterSurface,
    rng: Optional[RandomSource] = None,
    max_workers: Optional[int] = None,
) -> RasterSurface:
    """
    Render ``config`` into ``surface`` and return the surface.

    Args:
        config: :py:class:`~procart.config.GenerationConfig` snapshot.
        surface: Target :py:class:`~procart.surface.RasterSurface`. Every
            pixel is overwritten.
        rng: Random source shared by all layers. Defaults to
            ``RandomSource(config.seed)``.
        max_workers: Threads used for per-pixel backgrounds.

    Returns:
        The painted surface.

    Raises:
        InvalidConfig: ``config`` is not a valid configuration.
        SurfaceUnavailable: ``surface`` is missing or closed.

    Examples:
        >>> from procart import GenerationConfig, RasterSurface, render
        >>> surface = render(GenerationConfig(seed=1), RasterSurface(800, 600))
        >>> surface.topil().save("art.png")
    """
    return Pipeline(config, rng, max_workers).render(surface)


class Pipeline(object):
    """
    Render context.

    Layers are drawn straight into the surface, each over the previous ones:
    background, auto shapes, user shapes, particles, glow and caption,
    animation tint, inset image.

    Example::

        pipeline = Pipeline(config, RandomSource(7))
        pipeline.render(surface)
    """

    def __init__(
        self,
        config: GenerationConfig,
        rng: Optional[RandomSource] = None,
        max_workers: Optional[int] = None,
    ):
        if not isinstance(config, GenerationConfig):
            raise InvalidConfig(
                "Expected GenerationConfig, got %s" % type(config).__name__
            )
        attrs.validate(config)
        self._config = config
        self._rng = rng if rng is not None else RandomSource(config.seed)
        self._max_workers = max_workers

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def rng(self) -> RandomSource:
        return self._rng

    @property
    def stages(self) -> list[tuple[str, Callable]]:
        """Stage names and callables in drawing order."""
        return [
            ("background", self._draw_background),
            ("auto shapes", self._draw_auto_shapes),
            ("user shapes", self._draw_user_shapes),
            ("particles", self._draw_particles),
            ("caption", self._draw_caption),
            ("animation tint", self._draw_animation_tint),
            ("inset image", self._draw_inset_image),
        ]

    def render(self, surface: RasterSurface) -> RasterSurface:
        if not isinstance(surface, RasterSurface):
            raise SurfaceUnavailable(
                "Expected RasterSurface, got %s" % type(surface).__name__
            )
        surface.acquire()
        surface.reset_glow()

        exclude = exclusion_zone(surface.size, self._config.inset_image)
        if self._config.has_inset_image:
            logger.debug(
                "Shapes and particles anchored inside the inset image are skipped"
            )
        for name, stage in self.stages:
            logger.debug("Rendering %s" % name)
            stage(surface, exclude)
        return surface

    def _draw_background(self, surface, exclude):
        draw_background(
            surface,
            self._config.background_style,
            self._rng,
            max_workers=self._max_workers,
        )

    def _draw_auto_shapes(self, surface, exclude):
        draw_auto_shapes(
            surface,
            self._config.category,
            self._config.complexity,
            exclude,
            self._rng,
        )

    def _draw_user_shapes(self, surface, exclude):
        draw_user_shapes(surface, self._config.shapes, exclude)

    def _draw_particles(self, surface, exclude):
        scatter_particles(surface, self._config.particle_effect, exclude, self._rng)

    def _draw_caption(self, surface, exclude):
        draw_caption(surface, self._config.glow_intensity, self._config.caption)

    def _draw_animation_tint(self, surface, exclude):
        draw_animation_tint(surface, self._config.animation_phase)

    def _draw_inset_image(self, surface, exclude):
        draw_inset_image(surface, self._config.inset_image)
