import argparse
import logging
from typing import Optional

from procart.composite import render
from procart.config import Caption, GenerationConfig, Shape
from procart.constants import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    SUGGESTIONS,
    BackgroundStyle,
    Category,
    FontStyle,
    ParticleEffect,
)
from procart.exceptions import Error
from procart.pil_io import load_image, save_image
from procart.surface import RasterSurface
from procart.version import __version__

logger = logging.getLogger(__name__)


def _size(value: str) -> tuple[int, int]:
    try:
        width, height = (int(x) for x in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError("Expected WIDTHxHEIGHT, got %r" % value)
    return width, height


def _shape(value: str) -> Shape:
    parts = value.split(",", 4)
    if len(parts) < 4:
        raise argparse.ArgumentTypeError(
            "Expected KIND,X,Y,SIZE[,COLOR], got %r" % value
        )
    try:
        return Shape(*parts)
    except Error as e:
        raise argparse.ArgumentTypeError(str(e))


def _values(enum_class) -> list[str]:
    return [member.value for member in enum_class]


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="procart command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render an image file")
    render_parser.add_argument("output_file", help="Output image file")
    render_parser.add_argument(
        "--size",
        type=_size,
        default=(DEFAULT_WIDTH, DEFAULT_HEIGHT),
        help="Surface size as WIDTHxHEIGHT [default: %(default)s].",
    )
    render_parser.add_argument(
        "--category", choices=_values(Category), default=Category.GEOMETRIC.value
    )
    render_parser.add_argument("--complexity", type=int, default=50)
    render_parser.add_argument(
        "--background",
        choices=_values(BackgroundStyle),
        default=BackgroundStyle.GRADIENT.value,
    )
    render_parser.add_argument(
        "--particles",
        choices=_values(ParticleEffect),
        default=ParticleEffect.NONE.value,
    )
    render_parser.add_argument("--glow", type=float, default=0.0)
    render_parser.add_argument(
        "--phase", type=float, default=0.0, help="Animation tint phase in radians."
    )
    render_parser.add_argument("--text", help="Caption text.")
    render_parser.add_argument("--font-size", type=int, default=30)
    render_parser.add_argument(
        "--font-style", choices=_values(FontStyle), default=FontStyle.NORMAL.value
    )
    render_parser.add_argument("--text-color", default="#ffffff")
    render_parser.add_argument("--image", help="Inset image file.")
    render_parser.add_argument(
        "--shape",
        type=_shape,
        action="append",
        default=[],
        help="User shape as KIND,X,Y,SIZE[,COLOR]; repeatable.",
    )
    render_parser.add_argument("--seed", type=int, help="Random seed.")
    render_parser.add_argument(
        "--workers", type=int, help="Threads for per-pixel backgrounds."
    )

    subparsers.add_parser("suggestions", help="List style suggestions")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("procart")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    if args.command == "render":
        try:
            caption = None
            if args.text:
                caption = Caption(
                    args.text,
                    font_size=args.font_size,
                    font_style=args.font_style,
                    color=args.text_color,
                )
            config = GenerationConfig(
                category=args.category,
                complexity=args.complexity,
                background_style=args.background,
                particle_effect=args.particles,
                glow_intensity=args.glow,
                animation_phase=args.phase,
                caption=caption,
                inset_image=load_image(args.image) if args.image else None,
                shapes=args.shape,
                seed=args.seed,
            )
            surface = render(
                config, RasterSurface(*args.size), max_workers=args.workers
            )
        except Error as e:
            logger.error(str(e))
            return 1
        save_image(surface, args.output_file)
        logger.info("Saved %s" % args.output_file)

    elif args.command == "suggestions":
        for suggestion in SUGGESTIONS:
            print(suggestion)

    return None


if __name__ == "__main__":
    main()
