"""
Various constants for procart
"""
from enum import Enum


class Category(str, Enum):
    """
    Style category of the auto-generated shapes.
    """
    GEOMETRIC = "geometric"
    ABSTRACT = "abstract"
    FUTURISTIC = "futuristic"
    NATURE = "nature"
    MINIMALIST = "minimalist"


class BackgroundStyle(str, Enum):
    """
    Background pattern.
    """
    GRADIENT = "gradient"
    FRACTAL = "fractal"
    VORONOI = "voronoi"
    FLOW_FIELD = "flow"


class ParticleEffect(str, Enum):
    """
    Particle overlay.
    """
    NONE = "none"
    STARDUST = "stardust"
    FIREFLIES = "fireflies"


class ShapeKind(str, Enum):
    """
    Kind of user-placed shape.
    """
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"


class FontStyle(str, Enum):
    """
    Caption font style.
    """
    NORMAL = "normal"
    ITALIC = "italic"
    BOLD = "bold"
    BOLD_ITALIC = "bold italic"

    @property
    def is_bold(self):
        return self in (FontStyle.BOLD, FontStyle.BOLD_ITALIC)

    @property
    def is_italic(self):
        return self in (FontStyle.ITALIC, FontStyle.BOLD_ITALIC)


#: Reference surface size of the control panel.
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

#: Escape-time fractal parameters.
FRACTAL_MAX_ITERATIONS = 100
FRACTAL_ESCAPE_RADIUS_SQUARED = 16.0

#: Number of Voronoi seeds.
VORONOI_SEEDS = 20

#: Flow field spatial frequency.
FLOW_FIELD_SCALE = 0.01

#: Number of particle candidates per render.
PARTICLE_COUNT = 100

#: Glow color, rgba(255, 255, 255, 0.5).
GLOW_COLOR = (255, 255, 255, 128)

#: Outline drawn around every shape, canvas default 1px black.
OUTLINE_COLOR = (0, 0, 0, 255)
OUTLINE_WIDTH = 1.0

#: Static list of style suggestions shown next to the controls.
SUGGESTIONS = (
    "Abstract Neon",
    "Minimalist Shapes",
    "Futuristic Cityscape",
    "Natural Patterns",
    "Geometric Harmony",
)
