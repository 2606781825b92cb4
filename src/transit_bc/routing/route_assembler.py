"""Turns a search result into a RouteFound.

Walks the predecessor map back from the target, resolves every stop id
through the catalog and computes the route summary.

Transfer metrics:
- "lines": each path segment may be ridden on any line offering its
  (minimum) weight. Lines are chosen greedily, staying on a line for as
  many consecutive segments as it covers, which minimises line changes
  for the fixed stop sequence. Transfers = number of line changes.
- "approximate": number of intermediate stops (path length - 2). Counts
  every intermediate stop as a transfer, so it is an upper bound rather
  than a real transfer count.
"""

import logging
import math
from typing import List, Optional

from src.transit_bc.routing.exceptions import InternalConsistencyError
from src.transit_bc.routing.network_graph import NetworkGraph
from src.transit_bc.routing.path_finder import SearchResult
from src.transit_bc.routing.route_result import RouteFound, RouteLeg

logger = logging.getLogger(__name__)


TRANSFER_METRIC_LINES = "lines"
TRANSFER_METRIC_APPROXIMATE = "approximate"
TRANSFER_METRICS = (TRANSFER_METRIC_LINES, TRANSFER_METRIC_APPROXIMATE)


def round_minutes(minutes: float) -> int:
    """Round half up (52.5 -> 53); built-in round() would give 52."""
    return int(math.floor(minutes + 0.5))


def reconstruct_path(result: SearchResult) -> List[int]:
    """Stop ids from source to target, following the predecessor map."""
    path = [result.target]
    seen = {result.target}
    current = result.target

    while current in result.predecessors:
        current = result.predecessors[current]
        if current in seen:
            raise InternalConsistencyError(f"Predecessor chain loops at stop {current}")
        seen.add(current)
        path.append(current)

    path.reverse()

    if path[0] != result.source:
        raise InternalConsistencyError(
            f"Predecessor chain for stop {result.target} ends at {path[0]}, expected {result.source}"
        )
    return path


def choose_lines(graph: NetworkGraph, path: List[int]) -> List[Optional[str]]:
    """Pick one line per segment so that line changes are minimal.

    Segments added to the graph without a line id get None.
    """
    segment_lines = [sorted(graph.lines_between(path[i], path[i + 1])) for i in range(len(path) - 1)]
    chosen: List[Optional[str]] = []

    i = 0
    while i < len(segment_lines):
        candidates = segment_lines[i]
        if not candidates:
            chosen.append(None)
            i += 1
            continue

        # Line covering the most consecutive segments from i; lowest id on ties
        best_line, best_reach = None, i
        for line_id in candidates:
            reach = i
            while reach + 1 < len(segment_lines) and line_id in segment_lines[reach + 1]:
                reach += 1
            if reach > best_reach or best_line is None:
                best_line, best_reach = line_id, reach

        chosen.extend([best_line] * (best_reach - i + 1))
        i = best_reach + 1

    return chosen


class RouteAssembler:
    """Builds RouteFound results from search output.

    Args:
        catalog: anything with `get_stop(stop_id)` (normally StopCatalog)
        transfer_metric: "lines" or "approximate"
    """

    def __init__(self, catalog, transfer_metric: str = TRANSFER_METRIC_LINES):
        if transfer_metric not in TRANSFER_METRICS:
            raise ValueError(f"Unknown transfer metric: {transfer_metric}. Use one of {TRANSFER_METRICS}")
        self.catalog = catalog
        self.transfer_metric = transfer_metric

    def assemble(self, graph: NetworkGraph, result: SearchResult) -> RouteFound:
        path = reconstruct_path(result)

        stops = []
        for stop_id in path:
            stop = self.catalog.get_stop(stop_id)
            if stop is None:
                logger.error(f"Stop {stop_id} is in the network graph but not in the catalog")
                raise InternalConsistencyError(f"Stop {stop_id} on route is missing from the catalog")
            stops.append(stop)

        legs = self._build_legs(graph, path)

        if self.transfer_metric == TRANSFER_METRIC_APPROXIMATE:
            transfer_count = max(len(path) - 2, 0)
        else:
            transfer_count = max(len(legs) - 1, 0)

        return RouteFound(
            stops=stops,
            duration_minutes=round_minutes(result.distance),
            transfer_count=transfer_count,
            legs=legs,
            total_minutes=result.distance,
        )

    def _build_legs(self, graph: NetworkGraph, path: List[int]) -> List[RouteLeg]:
        legs: List[RouteLeg] = []

        for i, line_id in enumerate(choose_lines(graph, path)):
            from_stop_id, to_stop_id = path[i], path[i + 1]
            weight = graph.weight(from_stop_id, to_stop_id)
            if weight is None:
                raise InternalConsistencyError(f"Route uses missing segment {from_stop_id}-{to_stop_id}")

            if legs and legs[-1].line_id == line_id:
                legs[-1].stop_ids.append(to_stop_id)
                legs[-1].duration_minutes += weight
            else:
                legs.append(RouteLeg(
                    line_id=line_id,
                    stop_ids=[from_stop_id, to_stop_id],
                    duration_minutes=weight,
                ))

        return legs
