"""Feed item endpoints for the Feed API.

Error handling differs per route: only the listing maps store failures to a
structured 500. Failures on the other routes propagate to the server-error
middleware unchanged.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from feed_api.api.dependencies import get_app_settings, get_url_provider
from feed_api.auth import require_auth
from feed_api.config import Settings
from feed_api.db import crud
from feed_api.db.session import get_session
from feed_api.errors import FeedValidationError, UpstreamFailure, ValidationReason
from feed_api.feed.models import (
    FeedItemOut,
    FeedListOut,
    SignedUrlOut,
)
from feed_api.feed.signing import sign_feed_item, sign_feed_items
from feed_api.storage import SignedUrlProvider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feed"])
limiter = Limiter(key_func=get_remote_address)


def _text_field(body: Any, name: str) -> str | None:
    """Read a scalar field from a JSON object body as text.

    Anything that is not a JSON object counts as an empty body. Nested
    objects and arrays count as missing.
    """
    if not isinstance(body, dict):
        return None
    value = body.get(name)
    if not value or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


@router.get("", response_model=FeedListOut)
@router.get("/", response_model=FeedListOut, include_in_schema=False)
@limiter.limit("120/minute")
async def list_feed_items(
    request: Request,
    db: AsyncSession = Depends(get_session),
    provider: SignedUrlProvider = Depends(get_url_provider),
    settings: Settings = Depends(get_app_settings),
):
    """
    List every feed item, newest first, with signed media URLs.

    Items whose url cannot be signed are returned with their raw storage key.

    Returns:
        JSON response with:
            - count: Total number of items
            - rows: Items ordered by id descending
    """
    logger.info("GET /feed requested")

    try:
        logger.info("Fetching feed items from DB...")
        count, items = await crud.find_and_count_all(db)

        logger.info(f"Mapping signed URLs for {count} items...")
        rows = await sign_feed_items(
            items, provider, concurrency=settings.signing_concurrency
        )
    except Exception as e:
        logger.error("Error in GET /feed", exc_info=True)
        raise UpstreamFailure("Failed to fetch feed items") from e

    logger.info(f"Sending response with {len(rows)} items")
    return FeedListOut(count=count, rows=rows)


@router.get("/signed-url/{file_name}", status_code=201, response_model=SignedUrlOut)
@limiter.limit("30/minute")
async def get_signed_upload_url(
    request: Request,
    file_name: str,
    _: None = Depends(require_auth),
    provider: SignedUrlProvider = Depends(get_url_provider),
):
    """
    Get a signed URL the client can PUT a new media object to.

    Args:
        file_name: Object-storage key to upload to

    Returns:
        JSON response with the signed PUT url
    """
    url = await provider.get_upload_url(file_name)
    return SignedUrlOut(url=url)


@router.get("/{item_id}", response_model=FeedItemOut | None)
@limiter.limit("120/minute")
async def get_feed_item(
    request: Request,
    item_id: int,
    db: AsyncSession = Depends(get_session),
):
    """
    Get a single feed item as stored.

    The url is the raw storage key; it is not signed on this route. A
    missing item yields ``null`` with status 200.
    """
    item = await crud.get_feed_item(db, item_id)
    if item is None:
        return None
    return FeedItemOut.model_validate(item)


@router.post("", status_code=201, response_model=FeedItemOut)
@router.post("/", status_code=201, response_model=FeedItemOut, include_in_schema=False)
@limiter.limit("30/minute")
async def create_feed_item(
    request: Request,
    body: Any = Body(None),
    _: None = Depends(require_auth),
    db: AsyncSession = Depends(get_session),
    provider: SignedUrlProvider = Depends(get_url_provider),
):
    """
    Create a feed item for media that has already been uploaded.

    Request body:
        - caption: Caption text (required)
        - url: Object-storage key of the uploaded media (required)

    Returns:
        The saved item with its url replaced by a signed GET url. The stored
        record keeps the raw key.
    """
    caption = _text_field(body, "caption")
    if not caption:
        raise FeedValidationError(ValidationReason.MISSING_CAPTION)
    url = _text_field(body, "url")
    if not url:
        raise FeedValidationError(ValidationReason.MISSING_URL)

    item = await crud.create_feed_item(db, caption=caption, url=url)
    logger.info(f"Created feed item id={item.id}")

    return await sign_feed_item(item, provider)
