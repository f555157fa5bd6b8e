import logging

import attrs
import numpy as np
import pytest

import procart.composite.pipeline as pipeline_module
from procart.composite import Pipeline, render
from procart.composite.background import draw_gradient_fill
from procart.config import GenerationConfig, Shape
from procart.exceptions import InvalidConfig, SurfaceUnavailable
from procart.rng import RandomSource
from procart.surface import RasterSurface

from ..utils import solid_image

logger = logging.getLogger(__name__)


def test_minimalist_gradient(monkeypatch):
    counts = []
    draw_auto_shapes = pipeline_module.draw_auto_shapes

    def spy(*args, **kwargs):
        drawn = draw_auto_shapes(*args, **kwargs)
        counts.append(drawn)
        return drawn

    monkeypatch.setattr(pipeline_module, "draw_auto_shapes", spy)
    config = GenerationConfig(
        category="minimalist", complexity=5, background_style="gradient", seed=42
    )
    surface = render(config, RasterSurface(800, 600))
    assert counts == [5]
    pixels = surface.numpy()
    assert pixels.shape == (600, 800, 3)
    assert pixels.min() >= 0.0 and pixels.max() <= 1.0


def test_full_inset_suppresses_everything():
    transparent = np.zeros((600, 800, 4), dtype=np.float32)
    config = GenerationConfig(
        category="geometric",
        complexity=100,
        particle_effect="stardust",
        shapes=[Shape("circle", 400, 300, 50, "red")],
        inset_image=transparent,
        seed=3,
    )
    surface = render(config, RasterSurface(800, 600))

    rng = RandomSource(3)
    hues = (rng.hue(), rng.hue())
    background = draw_gradient_fill((0, 0, 800, 600), (800, 600), hues)
    # Only the background and the animation tint at phase 0 remain.
    expected = background * 0.9 + 0.1
    assert np.allclose(surface.numpy(), expected, atol=1e-5)


def test_inset_image_on_top():
    image = solid_image(20, 60, (0, 255, 0))
    config = GenerationConfig(
        shapes=[Shape("square", 5, 30, 10, "red")], inset_image=image, seed=1
    )
    pixels = render(config, RasterSurface(80, 60)).numpy()
    assert np.array_equal(pixels[:, 30:50], image)


def test_user_shape_visible():
    config = GenerationConfig(complexity=0, seed=1)
    with_shape = attrs.evolve(config, shapes=[Shape("circle", 40, 30, 20, "red")])
    plain = render(config, RasterSurface(80, 60)).numpy()
    pixels = render(with_shape, RasterSurface(80, 60)).numpy()
    assert not np.array_equal(plain[30, 40], pixels[30, 40])
    assert np.array_equal(plain[0, 0], pixels[0, 0])


def test_seed_is_deterministic():
    config = GenerationConfig(
        category="nature",
        background_style="voronoi",
        particle_effect="fireflies",
        seed=99,
    )
    first = render(config, RasterSurface(120, 90)).numpy()
    second = render(config, RasterSurface(120, 90)).numpy()
    assert first.tobytes() == second.tobytes()

    other = render(attrs.evolve(config, seed=100), RasterSurface(120, 90)).numpy()
    assert first.tobytes() != other.tobytes()


def test_explicit_rng():
    config = GenerationConfig(background_style="voronoi")
    first = render(config, RasterSurface(60, 40), rng=RandomSource(5)).numpy()
    second = render(attrs.evolve(config, seed=5), RasterSurface(60, 40)).numpy()
    assert np.array_equal(first, second)


def test_every_pixel_overwritten():
    config = GenerationConfig(background_style="fractal", seed=8)
    fresh = render(config, RasterSurface(60, 40)).numpy()
    dirty = RasterSurface(60, 40, color=(255, 0, 255))
    dirty.set_glow(10)
    assert np.array_equal(render(config, dirty).numpy(), fresh)


@pytest.mark.parametrize("style", ["gradient", "fractal", "voronoi", "flow"])
def test_max_workers(style):
    config = GenerationConfig(background_style=style, seed=12)
    single = render(config, RasterSurface(90, 70)).numpy()
    threaded = render(config, RasterSurface(90, 70), max_workers=4).numpy()
    assert np.array_equal(single, threaded)


def test_glow_is_reset():
    config = GenerationConfig(glow_intensity=12, caption="Hello", seed=2)
    surface = render(config, RasterSurface(200, 100))
    assert surface.glow is None


def test_stage_order(monkeypatch):
    calls = []
    for name in [
        "draw_background",
        "draw_auto_shapes",
        "draw_user_shapes",
        "scatter_particles",
        "draw_caption",
        "draw_animation_tint",
        "draw_inset_image",
    ]:
        monkeypatch.setattr(
            pipeline_module,
            name,
            lambda *args, _name=name, **kwargs: calls.append(_name),
        )
    render(GenerationConfig(), RasterSurface(10, 10))
    assert calls == [
        "draw_background",
        "draw_auto_shapes",
        "draw_user_shapes",
        "scatter_particles",
        "draw_caption",
        "draw_animation_tint",
        "draw_inset_image",
    ]


def test_stage_names():
    pipeline = Pipeline(GenerationConfig())
    assert [name for name, _ in pipeline.stages] == [
        "background",
        "auto shapes",
        "user shapes",
        "particles",
        "caption",
        "animation tint",
        "inset image",
    ]
    assert pipeline.rng.seed is None


@pytest.mark.parametrize("config", [None, {"category": "geometric"}, "geometric"])
def test_invalid_config(config):
    with pytest.raises(InvalidConfig):
        render(config, RasterSurface(10, 10))


@pytest.mark.parametrize("surface", [None, np.zeros((10, 10, 3)), "canvas"])
def test_missing_surface(surface):
    with pytest.raises(SurfaceUnavailable):
        render(GenerationConfig(), surface)


def test_closed_surface():
    surface = RasterSurface(10, 10)
    surface.close()
    with pytest.raises(SurfaceUnavailable):
        render(GenerationConfig(), surface)
