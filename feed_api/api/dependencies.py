"""FastAPI dependencies for API routers."""

from fastapi import Request

from feed_api.config import Settings
from feed_api.storage import SignedUrlProvider


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was created with."""
    return request.app.state.settings


def get_url_provider(request: Request) -> SignedUrlProvider:
    """Dependency returning the application's signed-URL provider."""
    return request.app.state.url_provider
