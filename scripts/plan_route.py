#!/usr/bin/env python3
"""Plan the fastest route between two stops from the command line.

Usage:
    python scripts/plan_route.py --from 1 --to 3
    python scripts/plan_route.py --from 9 --to 7 --strategy heap --json
    python scripts/plan_route.py --from 1 --to 10 --catalog data/network.json
    python scripts/plan_route.py --list
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.config import RoutingSettings
from src.transit_bc.catalog.stop_catalog import StopCatalog
from src.transit_bc.routing import RouteFound, RouteService

logger = logging.getLogger(__name__)


def format_route(route: RouteFound) -> str:
    lines = [
        f"{route.duration_minutes} min, {route.transfer_count} transfers, {len(route.stops) - 1} stops",
    ]
    stops_by_id = {stop.id: stop for stop in route.stops}
    for leg in route.legs:
        origin = stops_by_id[leg.from_stop_id].name
        destination = stops_by_id[leg.to_stop_id].name
        line_name = f"Line {leg.line_id}" if leg.line_id else "Unknown line"
        lines.append(
            f"  {line_name}: {origin} -> {destination} "
            f"({leg.segment_count} stops, {leg.duration_minutes:.1f} min)"
        )
    return "\n".join(lines)


def route_to_dict(route: RouteFound) -> dict:
    return {
        "stops": [stop.to_dict() for stop in route.stops],
        "duration_minutes": route.duration_minutes,
        "transfer_count": route.transfer_count,
        "legs": [
            {"line_id": leg.line_id, "stop_ids": leg.stop_ids, "duration_minutes": leg.duration_minutes}
            for leg in route.legs
        ],
    }


def main(argv=None) -> int:
    """Run a single route query. Returns 0 when a route is found."""
    parser = argparse.ArgumentParser(description='Fastest route between two stops')
    parser.add_argument('--from', dest='from_stop', type=int, help='Origin stop ID')
    parser.add_argument('--to', dest='to_stop', type=int, help='Destination stop ID')
    parser.add_argument(
        '--catalog',
        help='JSON catalog with "stops" and "lines" (defaults to the bundled network)'
    )
    parser.add_argument('--strategy', choices=['linear', 'heap'], default='linear')
    parser.add_argument('--transfers', choices=['lines', 'approximate'], default='lines')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    parser.add_argument('--list', action='store_true', help='List the stops of the catalog')
    parser.add_argument('--verbose', '-v', action='store_true')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )

    catalog = StopCatalog()
    if args.catalog:
        catalog.load_from_file(args.catalog)
    else:
        catalog.load_default()

    if args.list:
        for stop in catalog.list_stops():
            print(f"{stop.id:>4}  {stop.name}")
        return 0

    service = RouteService(
        catalog,
        RoutingSettings(SELECTION_STRATEGY=args.strategy, TRANSFER_METRIC=args.transfers),
    )
    result = service.find_route(args.from_stop, args.to_stop)

    if args.json:
        payload = {"success": result.success, "status": result.status.value, "message": result.message}
        if isinstance(result, RouteFound):
            payload["route"] = route_to_dict(result)
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif isinstance(result, RouteFound):
        print(format_route(result))
    else:
        print(result.message, file=sys.stderr)

    return 0 if result.success else 1


if __name__ == '__main__':
    sys.exit(main())
