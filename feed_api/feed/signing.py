"""Resolve feed item storage keys to signed download URLs."""

import asyncio
import logging
from collections.abc import Sequence

from feed_api.db.models import FeedItem
from feed_api.storage import SignedUrlProvider

from .models import FeedItemOut

logger = logging.getLogger(__name__)


async def sign_feed_item(item: FeedItem, provider: SignedUrlProvider) -> FeedItemOut:
    """Copy a stored item with its url replaced by a signed GET URL.

    The stored item is not modified. Errors from the provider propagate.
    """
    out = FeedItemOut.model_validate(item)
    return out.model_copy(update={"url": await provider.get_download_url(item.url)})


async def sign_feed_items(
    items: Sequence[FeedItem],
    provider: SignedUrlProvider,
    concurrency: int = 16,
) -> list[FeedItemOut]:
    """
    Sign the urls of many feed items concurrently.

    At most ``concurrency`` signing calls are in flight at once. The result
    keeps the order of ``items`` regardless of completion order. Items with an
    empty url are passed through. An item whose signing fails is logged and
    returned with its raw storage key.

    Args:
        items: Stored feed items
        provider: Signed-URL provider
        concurrency: Maximum number of concurrent signing calls

    Returns:
        One FeedItemOut per input item, in input order
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def _resolve(item: FeedItem) -> FeedItemOut:
        if not item.url:
            return FeedItemOut.model_validate(item)
        async with semaphore:
            try:
                return await sign_feed_item(item, provider)
            except Exception:
                logger.error(f"Error signing URL for item {item.id}", exc_info=True)
                return FeedItemOut.model_validate(item)

    return list(await asyncio.gather(*(_resolve(item) for item in items)))
