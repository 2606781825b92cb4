import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from core.rate_limiter import limiter, RateLimits
from adapters.http.api.transit.schemas import (
    StopResponse,
    LineResponse,
    RouteLegResponse,
    RouteResponse,
    RoutePlannerResponse,
)
from src.transit_bc.catalog.stop_catalog import StopCatalog, get_stop_catalog
from src.transit_bc.routing import RouteFound, RouteService, get_route_service
from src.transit_bc.routing.exceptions import (
    CatalogNotLoadedError,
    InternalConsistencyError,
    SearchLimitExceeded,
)
from src.transit_bc.stop.domain.entities.stop import Stop

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transit", tags=["Transit"])


def _stop_response(stop: Stop) -> StopResponse:
    return StopResponse(**stop.to_dict())


def _require_catalog(catalog: StopCatalog) -> StopCatalog:
    if not catalog.is_loaded:
        raise HTTPException(status_code=503, detail="Stop catalog is being loaded")
    return catalog


@router.get("/stops", response_model=List[StopResponse])
@limiter.limit(RateLimits.STOPS)
def get_stops(
    request: Request,
    q: Optional[str] = Query(None, description="Filter by stop name (case-insensitive substring)"),
    catalog: StopCatalog = Depends(get_stop_catalog),
):
    """List the stops of the network, optionally filtered by name."""
    catalog = _require_catalog(catalog)
    stops = catalog.search_stops(q) if q else catalog.list_stops()
    return [_stop_response(stop) for stop in stops]


@router.get("/stops/{stop_id}", response_model=StopResponse)
@limiter.limit(RateLimits.STOPS)
def get_stop(
    request: Request,
    stop_id: int,
    catalog: StopCatalog = Depends(get_stop_catalog),
):
    """Get a stop by id."""
    catalog = _require_catalog(catalog)
    stop = catalog.get_stop(stop_id)
    if not stop:
        raise HTTPException(status_code=404, detail=f"Stop {stop_id} not found")
    return _stop_response(stop)


@router.get("/lines", response_model=List[LineResponse])
@limiter.limit(RateLimits.LINES)
def get_lines(
    request: Request,
    catalog: StopCatalog = Depends(get_stop_catalog),
):
    """List the lines of the network with their per-segment travel time."""
    catalog = _require_catalog(catalog)
    return [
        LineResponse(
            id=line.id,
            stops=list(line.stop_ids),
            duration_minutes=line.duration_minutes,
            segment_minutes=round(line.segment_minutes, 2),
        )
        for line in catalog.list_lines()
    ]


@router.get("/route-planner", response_model=RoutePlannerResponse)
@limiter.limit(RateLimits.ROUTE_PLANNER)
def plan_route(
    request: Request,
    from_stop: Optional[int] = Query(None, alias="from", description="Origin stop ID"),
    to_stop: Optional[int] = Query(None, alias="to", description="Destination stop ID"),
    route_service: RouteService = Depends(get_route_service),
):
    """Find the fastest route between two stops.

    Missing, same or unknown stops and disconnected stops are reported with
    success=false and a status tag instead of an HTTP error.

    **Example requests:**
    ```
    GET /transit/route-planner?from=1&to=3
    GET /transit/route-planner?from=9&to=7
    ```
    """
    try:
        result = route_service.find_route(from_stop, to_stop)
    except CatalogNotLoadedError:
        raise HTTPException(status_code=503, detail="Stop catalog is being loaded")
    except SearchLimitExceeded as e:
        logger.warning(f"Route search aborted: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)
    except InternalConsistencyError as e:
        logger.exception(f"Route assembly failed for {from_stop} -> {to_stop}")
        raise HTTPException(status_code=500, detail=e.message)

    if not isinstance(result, RouteFound):
        return RoutePlannerResponse(
            success=False,
            status=result.status.value,
            message=result.message,
        )

    return RoutePlannerResponse(
        success=True,
        status=result.status.value,
        message=result.message,
        route=RouteResponse(
            stops=[_stop_response(stop) for stop in result.stops],
            duration_minutes=result.duration_minutes,
            transfer_count=result.transfer_count,
            stop_count=len(result.stops) - 1,
            legs=[
                RouteLegResponse(
                    line_id=leg.line_id,
                    from_stop_id=leg.from_stop_id,
                    to_stop_id=leg.to_stop_id,
                    stop_ids=leg.stop_ids,
                    duration_minutes=round(leg.duration_minutes, 2),
                )
                for leg in result.legs
            ],
        ),
    )
