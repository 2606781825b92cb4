import logging

from dotenv import load_dotenv
load_dotenv()  # Load .env file before importing settings

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from core.config import settings
from core.rate_limiter import limiter, rate_limit_exceeded_handler, RateLimits
from src.transit_bc.catalog.catalog_loader import lifespan_with_catalog

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    # Settings validation is done automatically in core/config.py on import

    app = FastAPI(
        title="Transit Route Finder API",
        description="Fastest bus routes between stops of the city network",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan_with_catalog,
    )

    # CORS middleware - Public API, no credentials needed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL] if settings.is_production else ["*"],
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Register routers
    from adapters.http.api.transit.routers import query_router
    app.include_router(query_router, prefix="/api/v1")

    @app.get("/health")
    @limiter.limit(RateLimits.HEALTH)
    async def health_check(request: Request):
        """Health check endpoint.

        Returns 503 until the stop catalog is loaded into memory.
        """
        from src.transit_bc.catalog.stop_catalog import StopCatalog

        catalog = StopCatalog.get_instance()

        if not catalog.is_loaded:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "loading",
                    "message": "Stop catalog is being loaded into memory"
                }
            )

        return {
            "status": "healthy",
            "stop_catalog": {
                "loaded": True,
                "load_time_seconds": round(catalog.load_time_seconds, 3),
                "stats": catalog.stats
            }
        }

    return app


app = create_app()
