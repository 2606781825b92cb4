"""Typed results returned by RouteService.find_route.

Exactly one of RouteFound, RouteNotFound, InvalidInput, SameStop or
UnknownStop is returned per query. Each carries a `status` tag the HTTP
layer forwards unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from src.transit_bc.stop.domain.entities.stop import Stop


class RouteStatus(str, Enum):
    FOUND = "found"
    INVALID_INPUT = "invalid_input"
    SAME_STOP = "same_stop"
    UNKNOWN_STOP = "unknown_stop"
    NO_ROUTE = "no_route"


@dataclass
class RouteLeg:
    """A run of consecutive segments ridden on a single line."""
    line_id: Optional[str]
    stop_ids: List[int]
    duration_minutes: float

    @property
    def from_stop_id(self) -> int:
        return self.stop_ids[0]

    @property
    def to_stop_id(self) -> int:
        return self.stop_ids[-1]

    @property
    def segment_count(self) -> int:
        return len(self.stop_ids) - 1


@dataclass
class RouteFound:
    """Fastest route between two stops."""
    status: ClassVar[RouteStatus] = RouteStatus.FOUND
    success: ClassVar[bool] = True

    stops: List[Stop]
    duration_minutes: int
    transfer_count: int
    legs: List[RouteLeg] = field(default_factory=list)
    total_minutes: float = 0.0  # Unrounded path weight

    @property
    def stop_ids(self) -> List[int]:
        return [stop.id for stop in self.stops]

    @property
    def message(self) -> str:
        return (
            f"Route found: {len(self.stops) - 1} stops, {self.duration_minutes} min, "
            f"{self.transfer_count} transfers"
        )


@dataclass
class RouteNotFound:
    status: ClassVar[RouteStatus] = RouteStatus.NO_ROUTE
    success: ClassVar[bool] = False

    from_stop_id: int
    to_stop_id: int

    @property
    def message(self) -> str:
        return f"No route found between stops {self.from_stop_id} and {self.to_stop_id}"


@dataclass
class InvalidInput:
    status: ClassVar[RouteStatus] = RouteStatus.INVALID_INPUT
    success: ClassVar[bool] = False

    message: str
    fields: List[str] = field(default_factory=list)


@dataclass
class SameStop:
    status: ClassVar[RouteStatus] = RouteStatus.SAME_STOP
    success: ClassVar[bool] = False

    stop_id: int

    @property
    def message(self) -> str:
        return "Departure and destination cannot be the same"


@dataclass
class UnknownStop:
    status: ClassVar[RouteStatus] = RouteStatus.UNKNOWN_STOP
    success: ClassVar[bool] = False

    stop_ids: List[int]

    @property
    def message(self) -> str:
        ids = ", ".join(str(stop_id) for stop_id in self.stop_ids)
        return f"Unknown stop: {ids}"


RouteResult = Union[RouteFound, RouteNotFound, InvalidInput, SameStop, UnknownStop]
