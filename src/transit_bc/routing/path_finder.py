"""Dijkstra shortest-path search over the network graph.

Two interchangeable strategies pick the next vertex to settle:
- "linear": scan of the unvisited set, O(V^2). Adequate for networks of a
  few hundred stops.
- "heap": binary heap keyed on (distance, stop_id), O((V+E) log V).

Both settle vertices in the same order (smallest distance first, lowest
stop id on ties) and relax neighbors in ascending id order, so they return
identical distances and predecessor maps.

All mutable search state (distances, predecessors, visited set) is local to
a single `find` call.
"""

import heapq
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from src.transit_bc.routing.exceptions import NoRouteFound, SearchLimitExceeded
from src.transit_bc.routing.network_graph import NetworkGraph

logger = logging.getLogger(__name__)


INFINITY = float('inf')
STRATEGY_LINEAR = "linear"
STRATEGY_HEAP = "heap"
STRATEGIES = (STRATEGY_LINEAR, STRATEGY_HEAP)


@dataclass
class SearchResult:
    """Outcome of a successful search. `distance` is always finite."""
    source: int
    target: int
    distance: float
    predecessors: Dict[int, int] = field(default_factory=dict)
    settled: List[int] = field(default_factory=list)


class PathFinder:
    """Single-source shortest-path search with early exit on the target.

    Args:
        strategy: "linear" or "heap"
        max_vertices: refuse graphs larger than this (0 = no cap)
        timeout_ms: abort searches running longer than this (0 = no deadline)
    """

    def __init__(self, strategy: str = STRATEGY_LINEAR, max_vertices: int = 0, timeout_ms: int = 0):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown selection strategy: {strategy}. Use one of {STRATEGIES}")
        self.strategy = strategy
        self.max_vertices = max_vertices
        self.timeout_ms = timeout_ms

    def find(self, graph: NetworkGraph, source: int, target: int) -> SearchResult:
        """Find the minimum-weight path from source to target.

        Raises:
            NoRouteFound: target is not reachable from source (or either
                stop is not served by any line)
            SearchLimitExceeded: vertex cap or deadline hit
        """
        if self.max_vertices and graph.vertex_count > self.max_vertices:
            raise SearchLimitExceeded(
                f"Graph has {graph.vertex_count} stops, limit is {self.max_vertices}"
            )

        unserved = [stop_id for stop_id in (source, target) if not graph.has_vertex(stop_id)]
        if unserved:
            logger.warning(f"Stops not served by any line: {unserved}")
            raise NoRouteFound(source, target)

        deadline = None
        if self.timeout_ms:
            deadline = time.monotonic() + self.timeout_ms / 1000

        if self.strategy == STRATEGY_HEAP:
            distances, predecessors, settled = self._search_heap(graph, source, target, deadline)
        else:
            distances, predecessors, settled = self._search_linear(graph, source, target, deadline)

        distance = distances.get(target, INFINITY)
        logger.debug(
            f"Search {source} -> {target} ({self.strategy}): settled {len(settled)} "
            f"of {graph.vertex_count} stops, distance={distance}"
        )

        if distance == INFINITY:
            raise NoRouteFound(source, target)

        return SearchResult(
            source=source,
            target=target,
            distance=distance,
            predecessors=predecessors,
            settled=settled,
        )

    def _check_deadline(self, deadline: Optional[float], settled: int) -> None:
        if deadline is not None and time.monotonic() > deadline:
            raise SearchLimitExceeded(
                f"Search exceeded {self.timeout_ms} ms after settling {settled} stops"
            )

    def _search_linear(
        self, graph: NetworkGraph, source: int, target: int, deadline: Optional[float]
    ) -> Tuple[Dict[int, float], Dict[int, int], List[int]]:
        distances: Dict[int, float] = {v: INFINITY for v in graph.vertices}
        distances[source] = 0
        predecessors: Dict[int, int] = {}
        unvisited: Set[int] = set(distances)
        settled: List[int] = []

        while unvisited:
            self._check_deadline(deadline, len(settled))

            current = min(unvisited, key=lambda v: (distances[v], v))
            if distances[current] == INFINITY:
                # Remaining stops are in other components
                break

            unvisited.remove(current)
            settled.append(current)

            if current == target:
                break

            for neighbor, weight in graph.neighbors(current):
                if neighbor not in unvisited:
                    continue
                alt = distances[current] + weight
                if alt < distances[neighbor]:
                    distances[neighbor] = alt
                    predecessors[neighbor] = current

        return distances, predecessors, settled

    def _search_heap(
        self, graph: NetworkGraph, source: int, target: int, deadline: Optional[float]
    ) -> Tuple[Dict[int, float], Dict[int, int], List[int]]:
        distances: Dict[int, float] = {source: 0}
        predecessors: Dict[int, int] = {}
        visited: Set[int] = set()
        settled: List[int] = []
        queue: List[Tuple[float, int]] = [(0, source)]

        while queue:
            self._check_deadline(deadline, len(settled))

            current_distance, current = heapq.heappop(queue)
            # Stale entry
            if current in visited or current_distance > distances[current]:
                continue

            visited.add(current)
            settled.append(current)

            if current == target:
                break

            for neighbor, weight in graph.neighbors(current):
                if neighbor in visited:
                    continue
                alt = current_distance + weight
                if alt < distances.get(neighbor, INFINITY):
                    distances[neighbor] = alt
                    predecessors[neighbor] = current
                    heapq.heappush(queue, (alt, neighbor))

        return distances, predecessors, settled
