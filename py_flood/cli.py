"""
Command-line entry point.

Usage:
    py-flood <map file> <algorithm> [visualize]

    algorithms: queue, stack or recursive (or breadth-first,
                depth-first-stack, depth-first-recursive)
    visualize:  true, anything else is treated as false
"""

import argparse
import sys
from typing import List, Optional

import structlog

from .config import settings
from .core.exceptions import ConfigurationError
from .core.map_loader import load_world_map
from .core.propagation import FloodSimulation
from .utils.logging import configure_logging
from .visualization.text import RENDERERS, ConsoleSink

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-flood",
        description="Simulate flooding on an elevation map",
    )
    parser.add_argument("map_file", help="Map file (.json or plain text)")
    parser.add_argument(
        "algorithm",
        help="queue, stack or recursive (or breadth-first, depth-first-stack, depth-first-recursive)",
    )
    parser.add_argument(
        "visualize",
        nargs="?",
        default="false",
        help="'true' to show every flooding step, anything else to show only the start and end",
    )
    parser.add_argument(
        "--renderer",
        choices=sorted(RENDERERS),
        default=None,
        help=f"Text rendering of each frame (default: {settings.renderer})",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help=f"Seconds to pause after each intermediate frame (default: {settings.frame_delay})",
    )
    parser.add_argument("--image", help="Also save the final state as a PNG image")
    parser.add_argument("--log-level", default=None, help="Log level (default: from settings)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(args.log_level or settings.log_level, settings.log_format)

    visualize = args.visualize.lower() == "true"
    renderer_name = args.renderer or settings.renderer
    delay = settings.frame_delay if args.delay is None else args.delay

    try:
        if renderer_name not in RENDERERS:
            raise ConfigurationError(
                f"Invalid renderer: {renderer_name!r}. Valid renderers are: {', '.join(sorted(RENDERERS))}"
            )
        if delay < 0:
            raise ConfigurationError(f"Delay must not be negative, got {delay}")

        world = load_world_map(args.map_file)
        sink = ConsoleSink(RENDERERS[renderer_name], stream=sys.stdout, clear_screen=visualize)
        simulation = FloodSimulation(
            world,
            args.algorithm,
            visualize=visualize,
            sink=sink,
            frame_delay=delay if visualize else 0.0,
        )
        result = simulation.run()
    except ConfigurationError as e:
        logger.error("Simulation not started", error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(
        f"{result.strategy.value}: flooded {result.flooded_count} of "
        f"{world.rows * world.cols} cells"
    )

    if args.image:
        from .visualization.image import save_flood_image

        try:
            save_flood_image(result.state, world, args.image)
        except OSError as e:
            logger.error("Image not saved", path=args.image, error=str(e))
            print(f"ERROR: Cannot write image {args.image}: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
