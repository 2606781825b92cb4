"""Weighted undirected graph of the transit network.

Vertices are stop ids; an edge joins two stops that are consecutive on at
least one line. Each edge stores the cheapest segment weight offered for
that stop pair together with the ids of the lines offering it.

When two lines serve the same stop pair with different segment times the
graph keeps the minimum: a rider would take the faster line.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from src.transit_bc.line.domain.entities.line import Line
from src.transit_bc.routing.exceptions import GraphError

logger = logging.getLogger(__name__)


def _edge_key(u: int, v: int) -> Tuple[int, int]:
    return (u, v) if u < v else (v, u)


class NetworkGraph:
    """Adjacency-map graph owned by a single instance.

    Once frozen the graph is never mutated again, so it can be shared by
    concurrent queries without locking.
    """

    def __init__(self):
        # {stop_id: {neighbor_id: weight}} - symmetric
        self._adjacency: Dict[int, Dict[int, float]] = {}
        # {(low_id, high_id): {line_id, ...}} - lines offering the stored weight
        self._edge_lines: Dict[Tuple[int, int], Set[str]] = {}
        self._frozen = False

    @classmethod
    def build_from_lines(cls, lines: Iterable[Line], freeze: bool = False) -> "NetworkGraph":
        """Build a graph from every consecutive stop pair of every line."""
        graph = cls()
        line_count = 0
        for line in lines:
            weight = line.segment_minutes
            for from_stop_id, to_stop_id in line.segments():
                graph.add_edge(from_stop_id, to_stop_id, weight, line_id=line.id)
            line_count += 1

        if freeze:
            graph.freeze()

        logger.info(
            f"Network graph built from {line_count} lines: "
            f"{graph.vertex_count} stops, {graph.edge_count} segments"
        )
        return graph

    # ----- Mutation -----

    def add_vertex(self, stop_id: int) -> None:
        """Ensure the vertex exists. Idempotent."""
        self._check_mutable()
        if stop_id not in self._adjacency:
            self._adjacency[stop_id] = {}

    def add_edge(self, u: int, v: int, weight: float, line_id: Optional[str] = None) -> None:
        """Add an undirected edge, keeping the minimum weight per stop pair.

        A lower weight replaces the stored one and its line set, an equal
        weight adds the line to the set, a higher weight is ignored.
        """
        self._check_mutable()
        if u == v:
            raise GraphError(f"Self-loop on stop {u} is not allowed")
        if not weight > 0:
            raise GraphError(f"Edge {u}-{v} must have a positive weight, got {weight}")

        self.add_vertex(u)
        self.add_vertex(v)

        key = _edge_key(u, v)
        current = self._adjacency[u].get(v)

        if current is None or weight < current:
            if current is not None:
                logger.debug(f"Segment {u}-{v}: {current} min replaced by {weight} min (line {line_id})")
            self._adjacency[u][v] = weight
            self._adjacency[v][u] = weight
            self._edge_lines[key] = {line_id} if line_id is not None else set()
        elif weight == current:
            if line_id is not None:
                self._edge_lines[key].add(line_id)

    def freeze(self) -> "NetworkGraph":
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphError("Network graph is frozen and cannot be modified")

    # ----- Read access -----

    @property
    def vertices(self) -> List[int]:
        return sorted(self._adjacency)

    @property
    def vertex_count(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return len(self._edge_lines)

    def has_vertex(self, stop_id: int) -> bool:
        return stop_id in self._adjacency

    def neighbors(self, stop_id: int) -> List[Tuple[int, float]]:
        """(neighbor_id, weight) pairs ordered by neighbor id."""
        return sorted(self._adjacency.get(stop_id, {}).items())

    def weight(self, u: int, v: int) -> Optional[float]:
        return self._adjacency.get(u, {}).get(v)

    def lines_between(self, u: int, v: int) -> FrozenSet[str]:
        """Lines offering the stored (minimum) weight between two stops."""
        return frozenset(self._edge_lines.get(_edge_key(u, v), ()))

    def __contains__(self, stop_id: int) -> bool:
        return self.has_vertex(stop_id)

    def __len__(self) -> int:
        return self.vertex_count
