"""API routers for the Feed API."""

from feed_api.api.routes_feed import router as feed_router
from feed_api.api.routes_health import router as health_router

__all__ = [
    "health_router",
    "feed_router",
]
