"""Startup loading of the stop catalog.

The catalog is loaded once before the API accepts traffic; with a shared
graph the network graph is built at the same time so the first route
request does not pay for it.
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from core.config import settings
from src.transit_bc.catalog.stop_catalog import StopCatalog

logger = logging.getLogger(__name__)


def load_stop_catalog(catalog_path: str = "") -> StopCatalog:
    """Load the catalog singleton from `catalog_path`, or the bundled network."""
    catalog = StopCatalog.get_instance()
    if catalog_path:
        catalog.load_from_file(catalog_path)
    else:
        catalog.load_default()
    return catalog


def _load_and_warm_up() -> None:
    """Load catalog and build the shared graph (synchronous)."""
    from src.transit_bc.routing.route_service import get_route_service

    load_stop_catalog(settings.CATALOG_PATH)

    if settings.routing.SHARE_GRAPH:
        get_route_service().get_graph()


@asynccontextmanager
async def lifespan_with_catalog(app):
    """FastAPI lifespan context manager that loads the stop catalog."""
    logger.info("Loading stop catalog into memory...")
    loop = asyncio.get_event_loop()
    await loop.run_in_executor(None, _load_and_warm_up)
    logger.info("Stop catalog loaded successfully")

    yield
