"""Command-line interface for the marker route planner."""

import argparse
import logging
import sys
from typing import List, Optional

from logging_config import setup_logging
from markers.models import GeoPoint
from markers.store import MarkerIndexError
from mapview.controller import InsufficientMarkersError, RouteController
from mapview.render import build_map, export_html
from routing.osrm_client import OSRMClient
from routing.policy import ConfigError, default_routing_policy
from routing.route_service import RouteResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mapview",
        description="Place markers and get the driving route between the first two",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # London -> Paris
  python -m mapview 51.5074,-0.1278 48.8566,2.3522

  # Three markers, then remove the first one (routes markers 2 and 3)
  python -m mapview 51.5074,-0.1278 48.8566,2.3522 50.8503,4.3517 --remove 0

  # Export the map to HTML
  python -m mapview 51.5074,-0.1278 48.8566,2.3522 --export route.html
        """,
    )

    parser.add_argument(
        "points",
        type=GeoPoint.parse,
        nargs="*",
        metavar="LAT,LON",
        help="Marker positions in click order",
    )
    parser.add_argument(
        "--remove",
        type=int,
        action="append",
        default=[],
        metavar="INDEX",
        help="Remove the marker at INDEX after placing all points (repeatable, applied in order)",
    )
    parser.add_argument(
        "--export",
        type=str,
        metavar="FILE",
        help="Export the map (markers + route) to an HTML file",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="OSRM server, overrides OSRM_BASE_URL",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: no override)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Also write a rotating mapview.log into DIR",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the route planner CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_dir=args.log_dir,
    )
    logger = logging.getLogger(__name__)

    overrides = {"timeout": args.timeout}
    if args.base_url:
        overrides["base_url"] = args.base_url
    try:
        policy = default_routing_policy(**overrides)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    resolver = RouteResolver(OSRMClient(policy))

    with RouteController(resolver=resolver) as controller:
        pending = None
        for point in args.points:
            pending = controller.add(point) or pending

        for index in args.remove:
            try:
                pending = controller.remove_at(index) or pending
            except MarkerIndexError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 2

        if len(controller.store) < 2:
            try:
                controller.calculate()
            except InsufficientMarkersError as e:
                print(e.notice)
        elif pending is not None:
            logger.info("Waiting for route")
            pending.result()

        for marker in controller.markers():
            print(f"[{marker.index}] {marker.label}")

        display = controller.display
        if display is not None:
            print(display.distance_text)
            print(display.time_text)
        elif len(controller.store) >= 2:
            print("No route found.", file=sys.stderr)

        if args.export:
            path = export_html(build_map(controller.markers(), display), args.export)
            print(f"Exported to {path}")

    return 1 if display is None and len(controller.store) >= 2 else 0


if __name__ == "__main__":
    sys.exit(main())
