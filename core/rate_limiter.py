"""Rate limiting configuration for the API.

Uses SlowAPI with in-memory storage (suitable for single-instance deployments).
For multi-instance deployments, configure Redis backend.

Rate limits are defined per endpoint type:
- Critical: Computationally expensive endpoints (route-planner)
- Medium: Catalog lookups (stops, lines)
- Low: Lightweight endpoints (health)
"""

import os
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse


def get_client_identifier(request: Request) -> str:
    """Get client identifier for rate limiting.

    Uses X-Forwarded-For header if behind a proxy, otherwise remote address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP (original client)
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


# Uses in-memory storage by default (suitable for single instance)
# For Redis: Set RATE_LIMIT_STORAGE_URI=redis://localhost:6379
rate_limit_storage = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=["200/minute"],
    storage_uri=rate_limit_storage,
    strategy="fixed-window",
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true",
)


class RateLimits:
    """Centralized rate limit definitions."""

    # Critical - graph search
    ROUTE_PLANNER = "60/minute"

    # Medium - catalog lookups
    STOPS = "200/minute"
    LINES = "200/minute"

    # Low - lightweight
    HEALTH = "1000/minute"
    DEFAULT = "200/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom handler for rate limit exceeded errors.

    Returns a JSON response with details about the limit.
    """
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Rate limit exceeded: {exc.detail}",
            "retry_after": getattr(exc, "retry_after", 60),
        },
        headers={
            "Retry-After": str(getattr(exc, "retry_after", 60)),
            "X-RateLimit-Limit": str(exc.detail) if exc.detail else "unknown",
        }
    )
