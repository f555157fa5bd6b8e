"""
Surface-wide effects: glow with caption, and the animation tint.

The glow is a blurred translucent white shadow. It is set on the surface
right before the caption and reset right after, so only the caption
carries it.

The animation tint is one frame of a pulsing white wash. Its phase is an
explicit input; callers running a live loop advance it over time with
:py:func:`phase_at`::

    phase = phase_at(time_ms=time.monotonic() * 1000, speed=2.5)
"""

import logging
import math
from typing import Optional

from procart.constants import GLOW_COLOR

logger = logging.getLogger(__name__)

TINT_COLOR = (255, 255, 255, 255)


def draw_caption(surface, glow_intensity: float, caption: Optional[object]) -> None:
    """
    Draw ``caption`` centered on the surface with the glow applied.

    :param glow_intensity: Glow blur radius in [0, 20]. 0 disables it.
    :param caption: :py:class:`~procart.config.Caption` or ``None``.
    """
    surface.set_glow(glow_intensity, GLOW_COLOR)
    try:
        if caption is None:
            return
        if not caption.text:
            logger.debug("Empty caption, nothing to draw")
            return
        center = (surface.width / 2.0, surface.height / 2.0)
        logger.debug("Caption %r at %s" % (caption.text, center))
        surface.draw_text(
            caption.text,
            center,
            caption.font_size,
            caption.color,
            bold=caption.font_style.is_bold,
            italic=caption.font_style.is_italic,
        )
    finally:
        surface.reset_glow()


def tint_alpha(phase: float) -> float:
    """Alpha of the tint, ``sin(phase) * 0.1 + 0.1``, within [0, 0.2]."""
    return math.sin(phase) * 0.1 + 0.1


def phase_at(time_ms: float, speed: float) -> float:
    """Phase reached after ``time_ms`` milliseconds at ``speed`` (0 to 10)."""
    return time_ms * speed / 1000.0


def draw_animation_tint(surface, phase: float) -> None:
    """Cover the surface with white at :py:func:`tint_alpha` opacity."""
    alpha = tint_alpha(phase)
    logger.debug("Animation tint alpha %.4f" % alpha)
    surface.fill_rect(surface.viewbox, TINT_COLOR, opacity=alpha)
