"""Tests for application construction."""

import pytest
from httpx import ASGITransport, AsyncClient

from feed_api.config import Settings
from feed_api.factory import create_app


@pytest.mark.asyncio
async def test_lifespan_creates_tables(url_provider):
    """Test that startup creates the schema when no session factory is given."""
    settings = Settings(
        _env_file=None,
        jwt_secret="test-secret",
        database_url="sqlite+aiosqlite:///:memory:",
    )
    app = create_app(settings, url_provider=url_provider)

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v0/feed")

    assert response.status_code == 200
    assert response.json() == {"count": 0, "rows": []}


def test_create_app_stores_collaborators_on_state(test_settings, test_db, url_provider):
    """Test that configuration and collaborators are fixed at construction."""
    app = create_app(test_settings, sessionmaker=test_db, url_provider=url_provider)

    assert app.state.settings is test_settings
    assert app.state.sessionmaker is test_db
    assert app.state.url_provider is url_provider


@pytest.mark.asyncio
async def test_custom_api_prefix(test_db, url_provider):
    """Test that feed routes are mounted under the configured prefix."""
    settings = Settings(_env_file=None, jwt_secret="test-secret", api_prefix="/feed")
    app = create_app(settings, sessionmaker=test_db, url_provider=url_provider)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/feed")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_cors_allows_authorization_header(test_app):
    """Test that preflight requests from the frontend may send Authorization."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.options(
            "/api/v0/feed",
            headers={
                "Origin": "http://localhost:8100",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:8100"
