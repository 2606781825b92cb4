"""Routing module for transit pathfinding.

Provides fastest-route planning between two stops of the network.

Pipeline:
- NetworkGraph: weighted undirected graph built from line segments
- PathFinder: Dijkstra search (linear-scan or heap selection)
- RouteAssembler: path reconstruction, stop resolution, transfer count
- RouteService: input validation and orchestration, typed results
"""

from .network_graph import NetworkGraph
from .path_finder import PathFinder, SearchResult
from .route_assembler import RouteAssembler
from .route_result import (
    RouteStatus,
    RouteLeg,
    RouteFound,
    RouteNotFound,
    InvalidInput,
    SameStop,
    UnknownStop,
    RouteResult,
)
from .route_service import RouteService, get_route_service

__all__ = [
    "NetworkGraph",
    "PathFinder",
    "SearchResult",
    "RouteAssembler",
    "RouteStatus",
    "RouteLeg",
    "RouteFound",
    "RouteNotFound",
    "InvalidInput",
    "SameStop",
    "UnknownStop",
    "RouteResult",
    "RouteService",
    "get_route_service",
]
