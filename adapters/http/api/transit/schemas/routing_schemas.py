"""Route planner response schemas.

A successful response carries the route; every failure (invalid input,
same stop, unknown stop, no route) is a 200 with success=false and the
matching status tag.
"""

from typing import Optional, List
from pydantic import BaseModel

from .stop_schemas import StopResponse


class RouteLegResponse(BaseModel):
    """Consecutive segments ridden on one line."""
    line_id: Optional[str] = None
    from_stop_id: int
    to_stop_id: int
    stop_ids: List[int]
    duration_minutes: float


class RouteResponse(BaseModel):
    """Fastest route from origin to destination."""
    stops: List[StopResponse]
    duration_minutes: int
    transfer_count: int
    stop_count: int  # Segments travelled (stops after the origin)
    legs: List[RouteLegResponse] = []


class RoutePlannerResponse(BaseModel):
    """Response from the route planner endpoint."""
    success: bool
    status: str  # found | invalid_input | same_stop | unknown_stop | no_route
    message: Optional[str] = None
    route: Optional[RouteResponse] = None
