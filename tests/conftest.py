"""Pytest configuration and fixtures."""

import os

# Must be set before the app (and its limiter) is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from app import app
from src.transit_bc.catalog.stop_catalog import StopCatalog
from src.transit_bc.line.domain.entities.line import Line
from src.transit_bc.stop.domain.entities.stop import Stop


@pytest.fixture
def client():
    """Create a test client for the FastAPI app (runs the catalog lifespan)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def api_base_url():
    """Base URL for transit API endpoints."""
    return "/api/v1/transit"


def make_stop(stop_id: int, name: str = None, lines=()) -> Stop:
    return Stop(
        id=stop_id,
        name=name or f"Stop {stop_id}",
        lat=43.3 + stop_id / 1000,
        lon=21.9 + stop_id / 1000,
        served_lines=frozenset(lines),
    )


@pytest.fixture
def make_catalog():
    """Factory for private (non-singleton) loaded catalogs.

    Usage: make_catalog(stop_ids, [("A", [1, 2, 3], 25), ...])
    """
    def _make(stop_ids, lines):
        catalog = StopCatalog()
        catalog.load_data(
            [make_stop(stop_id) for stop_id in stop_ids],
            [Line(id=line_id, stop_ids=tuple(stops), duration_minutes=duration)
             for line_id, stops, duration in lines],
        )
        return catalog
    return _make


@pytest.fixture
def default_catalog():
    """Private catalog with the bundled Niš network."""
    catalog = StopCatalog()
    catalog.load_default()
    return catalog


@pytest.fixture
def two_line_catalog(make_catalog):
    """Line A [1,2,3] in 25 min and line B [1,3,4] in 30 min."""
    return make_catalog([1, 2, 3, 4], [("A", [1, 2, 3], 25), ("B", [1, 3, 4], 30)])


@pytest.fixture
def disconnected_catalog(make_catalog):
    """Two separate components {1,2,3} and {4,5}, plus stop 6 on no line."""
    return make_catalog(
        [1, 2, 3, 4, 5, 6],
        [("A", [1, 2, 3], 20), ("B", [4, 5], 10)],
    )
