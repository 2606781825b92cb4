"""Route Service - fastest route between two stops of the network.

Validates the requested stop ids against the catalog, then runs
NetworkGraph -> PathFinder -> RouteAssembler and returns one typed result
(see route_result.py). Input problems and "no route" are returned as
results; only internal failures and search limits raise.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from core.config import RoutingSettings
from src.transit_bc.routing.exceptions import NoRouteFound
from src.transit_bc.routing.network_graph import NetworkGraph
from src.transit_bc.routing.path_finder import PathFinder
from src.transit_bc.routing.route_assembler import RouteAssembler
from src.transit_bc.routing.route_result import (
    InvalidInput,
    RouteNotFound,
    RouteResult,
    SameStop,
    UnknownStop,
)

if TYPE_CHECKING:
    from src.transit_bc.catalog.stop_catalog import StopCatalog

logger = logging.getLogger(__name__)


def _is_stop_id(value: Any) -> bool:
    # bool is an int subclass but never a valid id
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class RouteService:
    """Facade over graph construction, search and route assembly.

    Args:
        catalog: loaded StopCatalog
        routing_settings: strategy, transfer metric, graph sharing and guards
    """

    def __init__(self, catalog: "StopCatalog", routing_settings: Optional[RoutingSettings] = None):
        self.catalog = catalog
        self.routing_settings = routing_settings or RoutingSettings()
        self.path_finder = PathFinder(
            strategy=self.routing_settings.SELECTION_STRATEGY,
            max_vertices=self.routing_settings.MAX_GRAPH_VERTICES,
            timeout_ms=self.routing_settings.SEARCH_TIMEOUT_MS,
        )
        self.assembler = RouteAssembler(catalog, transfer_metric=self.routing_settings.TRANSFER_METRIC)
        # (graph, catalog generation it was built from)
        self._shared_graph: Optional[Tuple[NetworkGraph, int]] = None
        self._graph_lock = threading.Lock()

    def get_graph(self) -> NetworkGraph:
        """Return the network graph for one query.

        With SHARE_GRAPH the graph is built on first use, frozen and reused
        until the catalog is reloaded; otherwise a fresh graph is built every
        time.
        """
        if not self.routing_settings.SHARE_GRAPH:
            return NetworkGraph.build_from_lines(self.catalog.list_lines())

        shared = self._shared_graph
        if shared is not None and shared[1] == self.catalog.generation:
            return shared[0]

        with self._graph_lock:
            # Double-check locking
            snapshot = self.catalog.snapshot()
            shared = self._shared_graph
            if shared is None or shared[1] != snapshot.generation:
                if shared is not None:
                    logger.info(f"Stop catalog reloaded (generation {snapshot.generation}), rebuilding network graph")
                graph = NetworkGraph.build_from_lines(snapshot.lines.values(), freeze=True)
                shared = (graph, snapshot.generation)
                self._shared_graph = shared
            return shared[0]

    def invalidate_graph(self) -> None:
        """Drop the shared graph; the next query rebuilds it."""
        with self._graph_lock:
            self._shared_graph = None

    def find_route(self, from_stop_id: Optional[int], to_stop_id: Optional[int]) -> RouteResult:
        """Find the fastest route between two stops.

        Args:
            from_stop_id: Origin stop id (positive integer)
            to_stop_id: Destination stop id (positive integer)

        Returns:
            RouteFound, or RouteNotFound / InvalidInput / SameStop / UnknownStop

        Raises:
            InternalConsistencyError: graph and catalog disagree
            SearchLimitExceeded: vertex cap or search deadline hit
        """
        invalid = [
            name for name, value in (("from", from_stop_id), ("to", to_stop_id))
            if not _is_stop_id(value)
        ]
        if invalid:
            return InvalidInput(
                message="Please select both departure and destination stops",
                fields=invalid,
            )

        if from_stop_id == to_stop_id:
            return SameStop(stop_id=from_stop_id)

        unknown: List[int] = [
            stop_id for stop_id in (from_stop_id, to_stop_id) if not self.catalog.has_stop(stop_id)
        ]
        if unknown:
            logger.info(f"Route request for unknown stops {unknown}")
            return UnknownStop(stop_ids=unknown)

        graph = self.get_graph()

        try:
            search = self.path_finder.find(graph, from_stop_id, to_stop_id)
        except NoRouteFound:
            logger.warning(f"No route found from {from_stop_id} to {to_stop_id}")
            return RouteNotFound(from_stop_id=from_stop_id, to_stop_id=to_stop_id)

        route = self.assembler.assemble(graph, search)
        logger.info(
            f"Route {from_stop_id} -> {to_stop_id}: {route.stop_ids}, "
            f"{route.duration_minutes} min, {route.transfer_count} transfers"
        )
        return route


_route_service: Optional[RouteService] = None
_route_service_lock = threading.Lock()


def get_route_service() -> RouteService:
    """Process-wide RouteService over the StopCatalog singleton."""
    global _route_service
    if _route_service is None:
        with _route_service_lock:
            if _route_service is None:
                from core.config import settings
                from src.transit_bc.catalog.stop_catalog import StopCatalog

                _route_service = RouteService(StopCatalog.get_instance(), settings.routing)
    return _route_service


def reset_route_service() -> None:
    global _route_service
    with _route_service_lock:
        _route_service = None
