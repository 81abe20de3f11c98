"""Shared fixtures for Feed API tests."""

import time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from feed_api.api.routes_feed import limiter as feed_limiter
from feed_api.config import Settings
from feed_api.db.models import Base
from feed_api.factory import create_app
from feed_api.storage import SignedUrlProvider

TEST_SECRET = "test-jwt-secret"


class FakeSignedUrlProvider(SignedUrlProvider):
    """In-memory provider that records calls and can fail for chosen keys."""

    def __init__(self, failing_keys: set[str] | None = None):
        self.failing_keys = failing_keys or set()
        self.download_calls: list[str] = []
        self.upload_calls: list[str] = []

    async def get_download_url(self, key: str) -> str:
        self.download_calls.append(key)
        if key in self.failing_keys:
            raise RuntimeError(f"cannot sign {key}")
        return f"https://media.example.com/{key}?X-Signature=get"

    async def get_upload_url(self, key: str) -> str:
        self.upload_calls.append(key)
        if key in self.failing_keys:
            raise RuntimeError(f"cannot sign {key}")
        return f"https://media.example.com/{key}?X-Signature=put"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear rate limit counters so tests do not throttle each other."""
    feed_limiter.reset()
    yield


@pytest.fixture
def test_settings():
    """Create settings independent of the process environment."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        aws_media_bucket="test-media-bucket",
    )


@pytest.fixture
def make_token():
    """Return a helper that mints signed JWTs."""

    def _make_token(secret: str = TEST_SECRET, **claims) -> str:
        payload = {
            "sub": "user@example.com",
            "iat": int(time.time()),
            "exp": int(time.time()) + 3600,
        }
        payload.update(claims)
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make_token


@pytest.fixture
def auth_headers(make_token):
    """Authorization headers carrying a valid bearer token."""
    return {"Authorization": f"Bearer {make_token()}"}


@pytest_asyncio.fixture
async def test_db():
    """Create an in-memory test database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

    yield sessionmaker

    await engine.dispose()


@pytest.fixture
def url_provider():
    """Create a fake signed-URL provider."""
    return FakeSignedUrlProvider()


@pytest.fixture
def test_app(test_settings, test_db, url_provider):
    """Create the application wired to the test database and provider."""
    return create_app(test_settings, sessionmaker=test_db, url_provider=url_provider)


@pytest_asyncio.fixture
async def client(test_app):
    """HTTP client for the test application."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
