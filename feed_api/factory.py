"""Application factory for the Feed API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.middleware.base import BaseHTTPMiddleware

from feed_api.api import feed_router, health_router
from feed_api.config import Settings, get_settings
from feed_api.db.models import Base
from feed_api.db.session import create_engine_from_settings, create_sessionmaker
from feed_api.errors import register_exception_handlers
from feed_api.storage import SignedUrlProvider, get_signed_url_provider

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # JSON only; never let browsers sniff or frame it
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup when configured and dispose the engine on shutdown."""
    settings: Settings = app.state.settings
    engine = app.state.engine
    if settings.db_auto_create and engine is not None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    yield
    if engine is not None:
        await engine.dispose()


def create_app(
    settings: Settings | None = None,
    *,
    sessionmaker: async_sessionmaker[AsyncSession] | None = None,
    url_provider: SignedUrlProvider | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    All configuration and external collaborators are fixed here and stored
    on ``app.state``; request handlers read them from there.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        sessionmaker: Session factory for the feed store (built from
            ``settings.database_url`` if omitted)
        url_provider: Signed-URL provider (built from the storage settings
            if omitted)

    Returns:
        Configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Feed API",
        description="Feed items with captions and signed media URLs",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    if sessionmaker is None:
        app.state.engine = create_engine_from_settings(settings)
        app.state.sessionmaker = create_sessionmaker(app.state.engine)
    else:
        app.state.engine = None
        app.state.sessionmaker = sessionmaker
    app.state.url_provider = url_provider or get_signed_url_provider(settings)

    # Configure rate limiting
    app.state.limiter = Limiter(key_func=get_remote_address)
    register_exception_handlers(app)

    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )

    app.include_router(health_router)
    app.include_router(feed_router, prefix=settings.api_prefix)

    return app
