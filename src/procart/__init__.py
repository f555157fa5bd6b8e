"""
procart: procedural composite raster generation.

A render turns a small set of parameters into an image: a background
pattern, category-styled and user-placed shapes, particles, a glowing
caption, an animation tint and an optional inset image.

Basic usage::

    from procart import GenerationConfig, RasterSurface, render

    config = GenerationConfig(
        category="futuristic",
        complexity=70,
        background_style="voronoi",
        particle_effect="stardust",
        seed=42,
    )
    surface = render(config, RasterSurface(800, 600))
    surface.topil().save("art.png")

Architecture:

- :py:mod:`procart.config`: immutable, validated generation parameters
- :py:mod:`procart.surface`: raster buffer and drawing primitives
- :py:mod:`procart.composite`: layer generators and the pipeline
- :py:mod:`procart.rng`: seedable random source
"""

from procart.composite import Pipeline, render
from procart.config import Caption, GenerationConfig, Shape
from procart.rng import RandomSource
from procart.surface import RasterSurface
from procart.version import __version__

__all__ = [
    "Caption",
    "GenerationConfig",
    "Pipeline",
    "RandomSource",
    "RasterSurface",
    "Shape",
    "render",
    "__version__",
]
