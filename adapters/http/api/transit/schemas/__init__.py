"""Centralized API schemas for transit endpoints."""

from .stop_schemas import StopResponse, LineResponse
from .routing_schemas import RouteLegResponse, RouteResponse, RoutePlannerResponse

__all__ = [
    "StopResponse",
    "LineResponse",
    "RouteLegResponse",
    "RouteResponse",
    "RoutePlannerResponse",
]
