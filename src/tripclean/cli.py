"""Command-line entry point: load a trip, clean it and export the result.

``tripclean csv points.csv`` prints the kept points as ``lon,lat,timestamp``
lines, ``tripclean map points.csv -o route.html`` writes the map overlay.
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

from tripclean.config import DEFAULT_SPEED_LIMIT_KMH, CleanerConfig
from tripclean.core.route import Route
from tripclean.core.stream import RouteReader
from tripclean.errors import TripCleanError
from tripclean.export.overlay import save_map, to_html
from tripclean.export.tabular import to_csv, write_csv
from tripclean.metrics import calculate_rejection_ratio, calculate_speed_stats
from tripclean.modules.cleaning.speed_filter import RouteCleaner

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.WARNING) -> None:
    # stdout carries the export, so logs go to stderr
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"speed limit must be positive and finite, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('input', nargs='?', default='points.csv', help='Raw lat,lon,timestamp records (default: points.csv)')
    common.add_argument('--speed-limit', type=_positive_float, default=DEFAULT_SPEED_LIMIT_KMH,
                        help=f'Maximum plausible speed in km/h (default: {DEFAULT_SPEED_LIMIT_KMH:g})')
    common.add_argument('--lenient', action='store_true', help='Skip malformed lines instead of aborting the load')
    common.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    parser = argparse.ArgumentParser(prog='tripclean', description="Remove physically implausible points from a recorded trip.")
    sub = parser.add_subparsers(dest='command', required=True)

    p_csv = sub.add_parser('csv', parents=[common], help='Print kept points as lon,lat,timestamp')
    p_csv.add_argument('--output', '-o', help='Write to this file instead of stdout')

    p_map = sub.add_parser('map', parents=[common], help='Render kept points as an HTML map overlay')
    p_map.add_argument('--output', '-o', help='Write to this file instead of stdout')

    p_plot = sub.add_parser('plot', parents=[common], help='Save a raw vs. cleaned plot')
    p_plot.add_argument('--output', '-o', default='route.png', help='Image path (default: route.png)')

    sub.add_parser('stats', parents=[common], help='Print cleaning statistics')
    return parser


def resolve_config(args: argparse.Namespace) -> CleanerConfig:
    return CleanerConfig(
        speed_limit=args.speed_limit,
        strict=not args.lenient,
        log_level=logging.INFO if args.verbose else logging.WARNING,
    )


def run(input_path: str, config: CleanerConfig) -> Route:
    """Load and clean a route according to `config`."""
    reader = RouteReader(strict=config.strict)
    route = reader.read(input_path)
    if reader.skipped:
        logger.warning("Skipped %d malformed line(s) in %s", len(reader.skipped), input_path)
    return RouteCleaner(speed_limit=config.speed_limit).clean(route)


def _print_stats(route: Route, config: CleanerConfig) -> None:
    stats = calculate_speed_stats(route.valid_points, speed_limit=config.speed_limit)
    print(f"Points:          {len(route)}")
    print(f"Kept:            {len(route.valid_points)}")
    print(f"Rejected:        {len(route.invalid_points)}")
    print(f"Rejection ratio: {calculate_rejection_ratio(route):.2%}")
    print(f"Average speed:   {stats['average_speed']:.1f} km/h")
    print(f"Max speed:       {stats['max_speed']:.1f} km/h")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = resolve_config(args)
    configure_logging(config.log_level)

    try:
        route = run(args.input, config)
    except TripCleanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == 'csv':
        if args.output:
            count = write_csv(route, args.output)
            logger.info("Wrote %d points to %s", count, args.output)
        else:
            sys.stdout.write(to_csv(route))
    elif args.command == 'map':
        if args.output:
            save_map(route, args.output)
            logger.info("Map saved to %s", args.output)
        else:
            sys.stdout.write(to_html(route))
    elif args.command == 'plot':
        import matplotlib.pyplot as plt
        from tripclean.export.plot import plot_route
        fig = plot_route(route, title=f"Cleaned route ({args.input})")
        fig.savefig(args.output, dpi=150, bbox_inches='tight')
        plt.close(fig)
        print(f"Plot saved to {args.output}")
    elif args.command == 'stats':
        _print_stats(route, config)

    return 0
