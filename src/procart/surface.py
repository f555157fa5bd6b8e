"""
Raster drawing surface.

:py:class:`RasterSurface` owns a float32 ``(height, width, 3)`` RGB buffer in
[0, 1] and offers the handful of primitives the generation pipeline needs.
Every draw composites in place with the *source-over* rule::

    result = source * alpha + backdrop * (1 - alpha)

Vector paths are SVG-like path strings (``M``, ``L``, ``C``, ``Z``)
rasterized with aggdraw into coverage masks, the same way vector masks are
rendered for layer compositing. A glow, once set, paints a blurred shadow
of every following fill, stroke and text draw until it is reset.

Example::

    surface = RasterSurface(800, 600)
    surface.fill_path("M 10 10 L 110 10 L 110 110 Z", (255, 0, 0, 255))
    surface.topil().save("out.png")
"""

import logging
from typing import Optional, Sequence, Tuple

import aggdraw  # type: ignore[import-not-found]
import numpy as np
from PIL import Image, ImageDraw, ImageFont
from scipy.ndimage import gaussian_filter  # type: ignore[import-untyped]
from skimage.transform import resize  # type: ignore[import-untyped]

from procart.constants import GLOW_COLOR
from procart.exceptions import InvalidDimensions, SurfaceUnavailable
from procart.utils import clip, intersect

logger = logging.getLogger(__name__)

BBox = Tuple[int, int, int, int]

#: Horizontal shear applied to simulate an oblique font.
ITALIC_SHEAR = 0.2


def _to_float_color(color: Sequence[int]) -> Tuple[np.ndarray, float]:
    rgb = np.array(color[:3], dtype=np.float32) / 255.0
    alpha = float(color[3]) / 255.0 if len(color) > 3 else 1.0
    return rgb, alpha


class RasterSurface(object):
    """
    Fixed-size RGB raster with drawing primitives.

    :param width: Width in pixels, must be positive.
    :param height: Height in pixels, must be positive.
    :param color: Initial ``(r, g, b)`` color in 0..255.
    """

    def __init__(self, width: int, height: int, color: Sequence[int] = (0, 0, 0)):
        try:
            valid = int(width) == width and int(height) == height
            valid = valid and width > 0 and height > 0
        except (TypeError, ValueError):
            valid = False
        if not valid:
            raise InvalidDimensions(
                "Surface dimensions must be positive integers, got %rx%r"
                % (width, height)
            )
        self._width = int(width)
        self._height = int(height)
        rgb, _ = _to_float_color(tuple(color))
        self._color: Optional[np.ndarray] = np.empty(
            (self._height, self._width, 3), dtype=np.float32
        )
        self._color[:, :, :] = rgb
        self._glow: Optional[Tuple[float, Tuple[int, ...]]] = None

    def __repr__(self) -> str:
        return "%s(width=%d, height=%d%s)" % (
            self.__class__.__name__,
            self._width,
            self._height,
            ", closed" if self.closed else "",
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        """``(width, height)`` tuple."""
        return self._width, self._height

    @property
    def viewbox(self) -> BBox:
        """``(left, top, right, bottom)`` of the whole surface."""
        return 0, 0, self._width, self._height

    @property
    def closed(self) -> bool:
        return self._color is None

    @property
    def glow(self) -> Optional[Tuple[float, Tuple[int, ...]]]:
        """Current ``(radius, color)`` glow, or ``None``."""
        return self._glow

    def close(self) -> None:
        """Release the pixel buffer. Further drawing raises an error."""
        self._color = None
        self._glow = None

    def acquire(self) -> np.ndarray:
        """Return the live pixel buffer."""
        if self._color is None:
            raise SurfaceUnavailable("Drawing surface has been closed")
        return self._color

    def numpy(self) -> np.ndarray:
        """Return a copy of the pixels as float32 ``(height, width, 3)``."""
        return self.acquire().copy()

    def topil(self) -> Image.Image:
        """Return the pixels as an RGB :py:class:`PIL.Image.Image`."""
        from procart.pil_io import array_to_pil

        return array_to_pil(self.acquire())

    def set_glow(
        self, radius: float, color: Sequence[int] = GLOW_COLOR
    ) -> None:
        """Apply a blurred shadow of ``color`` to the following draws."""
        self.acquire()
        if radius <= 0:
            self._glow = None
        else:
            self._glow = (float(radius), tuple(color))

    def reset_glow(self) -> None:
        self._glow = None

    def paste(self, viewport: BBox, color: np.ndarray) -> None:
        """Overwrite ``viewport`` with a ``(height, width, 3)`` array."""
        buffer = self.acquire()
        left, top, right, bottom = viewport
        assert color.shape[:2] == (bottom - top, right - left), (
            "Color shape %s does not match viewport %s" % (color.shape, viewport)
        )
        buffer[top:bottom, left:right, :] = color[:, :, :3]

    def fill_rect(
        self, bbox: Sequence[float], color: Sequence[int], opacity: float = 1.0
    ) -> None:
        """Fill a pixel-aligned rectangle ``(left, top, right, bottom)``."""
        buffer = self.acquire()
        region = intersect(
            tuple(int(round(x)) for x in bbox), self.viewbox  # type: ignore[arg-type]
        )
        if region == (0, 0, 0, 0):
            return
        left, top, right, bottom = region
        mask = np.ones((bottom - top, right - left, 1), dtype=np.float32)
        self._draw_mask(buffer, region, mask, color, opacity)

    def fill_path(
        self,
        path: str,
        color: Sequence[int],
        opacity: float = 1.0,
        bbox: Optional[Sequence[float]] = None,
    ) -> None:
        """
        Fill an SVG-like path. Open subpaths are closed implicitly.

        ``bbox`` is an optional hint of the path extent; drawing is limited
        to it (plus the glow margin).
        """
        region = self._region(bbox)
        if region is None:
            return
        mask = self._rasterize(path, region, brush={"color": 255})
        self._draw_mask(self.acquire(), region, mask, color, opacity)

    def stroke_path(
        self,
        path: str,
        color: Sequence[int],
        width: float = 1.0,
        opacity: float = 1.0,
        bbox: Optional[Sequence[float]] = None,
    ) -> None:
        """Stroke an SVG-like path with a pen of ``width`` pixels."""
        if bbox is not None:
            bbox = (bbox[0] - width, bbox[1] - width, bbox[2] + width, bbox[3] + width)
        region = self._region(bbox)
        if region is None:
            return
        mask = self._rasterize(path, region, pen={"color": 255, "width": width})
        self._draw_mask(self.acquire(), region, mask, color, opacity)

    def draw_text(
        self,
        text: str,
        xy: Tuple[float, float],
        font_size: int,
        color: Sequence[int],
        bold: bool = False,
        italic: bool = False,
        anchor: str = "ms",
    ) -> None:
        """
        Draw ``text`` anchored at ``xy``.

        The default anchor ``"ms"`` centers the text horizontally on ``x``
        with its baseline on ``y``. Bold adds a stroke of the text color,
        italic shears the glyphs around the baseline.
        """
        buffer = self.acquire()
        font = ImageFont.load_default(size=font_size)
        mask_image = Image.new("L", self.size, 0)
        draw = ImageDraw.Draw(mask_image)
        stroke_width = max(1, int(font_size) // 24) if bold else 0
        draw.text(
            xy,
            text,
            fill=255,
            font=font,
            anchor=anchor,
            stroke_width=stroke_width,
            stroke_fill=255,
        )
        if italic:
            mask_image = mask_image.transform(
                mask_image.size,
                Image.Transform.AFFINE,
                (1, ITALIC_SHEAR, -ITALIC_SHEAR * xy[1], 0, 1, 0),
                resample=Image.Resampling.BILINEAR,
            )
        mask = np.expand_dims(np.asarray(mask_image, dtype=np.float32) / 255.0, 2)
        self._draw_mask(buffer, self.viewbox, mask, color)

    def blit(self, bitmap: np.ndarray, bbox: Sequence[float]) -> None:
        """
        Resize ``bitmap`` to ``bbox`` and draw it on top.

        ``bitmap`` is a float ``(height, width, 3|4)`` array in [0, 1]; the
        alpha channel of an RGBA bitmap is honored, RGB is opaque.
        """
        buffer = self.acquire()
        target = tuple(int(round(x)) for x in bbox)
        width, height = target[2] - target[0], target[3] - target[1]
        if width <= 0 or height <= 0:
            logger.debug("Empty blit target %s" % (target,))
            return
        if bitmap.shape[:2] == (height, width):
            pixels = bitmap.astype(np.float32)
        else:
            pixels = resize(
                bitmap,
                (height, width, bitmap.shape[2]),
                order=1,
                anti_aliasing=bitmap.shape[0] > height or bitmap.shape[1] > width,
            ).astype(np.float32)
        region = intersect(target, self.viewbox)  # type: ignore[arg-type]
        if region == (0, 0, 0, 0):
            return
        src = pixels[
            region[1] - target[1] : region[3] - target[1],
            region[0] - target[0] : region[2] - target[0],
            :,
        ]
        left, top, right, bottom = region
        view = buffer[top:bottom, left:right, :]
        if src.shape[2] == 4:
            alpha = clip(src[:, :, 3:4])
            view[:, :, :] = src[:, :, :3] * alpha + view * (1.0 - alpha)
        else:
            view[:, :, :] = clip(src)

    def _region(self, bbox: Optional[Sequence[float]]) -> Optional[BBox]:
        if bbox is None:
            return self.viewbox
        pad = 1
        if self._glow is not None:
            pad += int(np.ceil(self._glow[0] * 2))
        expanded = (
            int(np.floor(bbox[0])) - pad,
            int(np.floor(bbox[1])) - pad,
            int(np.ceil(bbox[2])) + pad,
            int(np.ceil(bbox[3])) + pad,
        )
        region = intersect(expanded, self.viewbox)
        if region == (0, 0, 0, 0):
            return None
        return region

    def _rasterize(self, path: str, region: BBox, brush=None, pen=None) -> np.ndarray:
        left, top, right, bottom = region
        mask = Image.new("L", (right - left, bottom - top), 0)
        draw = aggdraw.Draw(mask)
        pen = aggdraw.Pen(**pen) if pen else None
        brush = aggdraw.Brush(**brush) if brush else None
        symbol = aggdraw.Symbol(path)
        draw.symbol((-left, -top), symbol, pen, brush)
        draw.flush()
        del draw
        return np.expand_dims(np.array(mask).astype(np.float32) / 255.0, 2)

    def _draw_mask(
        self,
        buffer: np.ndarray,
        region: BBox,
        mask: np.ndarray,
        color: Sequence[int],
        opacity: float = 1.0,
    ) -> None:
        left, top, right, bottom = region
        view = buffer[top:bottom, left:right, :]
        rgb, alpha = _to_float_color(color)
        alpha *= opacity
        if self._glow is not None:
            radius, glow_color = self._glow
            glow_rgb, glow_alpha = _to_float_color(glow_color)
            # Canvas shadows use a gaussian with sigma = blur / 2.
            shadow = gaussian_filter(mask[:, :, 0] * alpha, sigma=radius / 2.0)
            shadow = np.expand_dims(shadow, 2) * glow_alpha
            view[:, :, :] = glow_rgb * shadow + view * (1.0 - shadow)
        coverage = mask * alpha
        view[:, :, :] = clip(rgb * coverage + view * (1.0 - coverage))
