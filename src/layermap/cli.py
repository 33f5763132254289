"""Command-line interface for layer map generation."""

import argparse
import logging
import sys
from pathlib import Path

import structlog

DEFAULT_MARKERS = "~.:^"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a layered tile map and print a text preview"
    )
    parser.add_argument("--config", type=str, help="Path to a TOML config file")
    parser.add_argument("--width", type=int, default=None, help="Map width")
    parser.add_argument("--height", type=int, default=None, help="Map height")
    parser.add_argument("--seed", type=float, default=None, help="Noise seed")
    parser.add_argument(
        "--scale", type=float, default=None, help="Noise frequency divisor (0, 1]"
    )
    parser.add_argument(
        "--shape",
        choices=["none", "rectangle", "ellipse"],
        default=None,
        help="Coastline shape",
    )
    parser.add_argument(
        "--border", type=int, default=None, help="Water border width (0 disables)"
    )
    parser.add_argument(
        "--fade",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Paint overlap halos between layers",
    )
    parser.add_argument(
        "--centered",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Put cell (0, 0) at the center of the map",
    )
    parser.add_argument(
        "--randomize", action="store_true", help="Use a random seed"
    )
    parser.add_argument(
        "--markers",
        type=str,
        default=None,
        help=f"One character per layer, lowest first (default: {DEFAULT_MARKERS!r})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for layer map generation."""
    args = _build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    # Import here to avoid slow startup for --help
    from .config import GeneratorConfig, load_config
    from .exceptions import ConfigError
    from .generator import TilemapGenerator

    base = load_config(Path(args.config)) if args.config else GeneratorConfig()

    overrides = {
        "width": args.width,
        "height": args.height,
        "seed": args.seed,
        "scale": args.scale,
        "coastline_shape": args.shape,
        "border_width": args.border,
        "fade_out_tiles": args.fade,
        "centered": args.centered,
    }
    data = base.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    if args.randomize:
        data["randomize"] = True
    if args.markers is not None:
        data["markers"] = list(args.markers)
    elif not data["markers"]:
        data["markers"] = list(DEFAULT_MARKERS)
    config = GeneratorConfig.model_validate(data)

    generator = TilemapGenerator(config)
    try:
        grid = generator.generate()
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print(generator.layers.render_text())
    print()
    print(f"{grid.width}x{grid.height} map, seed {generator.seed:.3f}")
    for layer, marker in enumerate(config.markers):
        print(f"  layer {layer} {marker!r}: {int((grid.layers == layer).sum())} cells")


if __name__ == "__main__":
    main()
