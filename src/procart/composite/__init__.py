"""
Generation engine.

This subpackage turns a :py:class:`~procart.config.GenerationConfig` into
pixels. Each module implements one layer:

- :py:mod:`procart.composite.background`: gradient, fractal, Voronoi and
  flow field backgrounds
- :py:mod:`procart.composite.vector`: auto and user shapes
- :py:mod:`procart.composite.particles`: stardust and firefly particles
- :py:mod:`procart.composite.effects`: glow, caption and animation tint
- :py:mod:`procart.composite.image`: inset image and exclusion zone
- :py:mod:`procart.composite.pipeline`: the fixed drawing order

Example usage::

    from procart.composite import render
    from procart.config import GenerationConfig
    from procart.surface import RasterSurface

    surface = render(GenerationConfig(background_style="fractal"),
                     RasterSurface(800, 600))

The fractal, Voronoi and flow field backgrounds are computed per pixel and
dominate the cost of a render; pass ``max_workers`` to spread their rows
over threads.
"""

from procart.composite.pipeline import Pipeline, render

__all__ = [
    "Pipeline",
    "render",
]
