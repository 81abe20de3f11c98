"""Feed store operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feed_api.db.models import FeedItem


async def find_and_count_all(db: AsyncSession) -> tuple[int, list[FeedItem]]:
    """Get every feed item, newest first, with the total count.

    Args:
        db: Database session

    Returns:
        Tuple of (total item count, items ordered by id descending)
    """
    count = await db.scalar(select(func.count()).select_from(FeedItem))
    result = await db.execute(select(FeedItem).order_by(FeedItem.id.desc()))
    return count or 0, list(result.scalars().all())


async def get_feed_item(db: AsyncSession, item_id: int) -> FeedItem | None:
    """Get a feed item by its primary key."""
    return await db.get(FeedItem, item_id)


async def create_feed_item(db: AsyncSession, caption: str, url: str) -> FeedItem:
    """Persist a new feed item and return it with its assigned id.

    Args:
        db: Database session
        caption: Caption text
        url: Object-storage key of the uploaded media

    Returns:
        The saved FeedItem
    """
    item = FeedItem(caption=caption, url=url)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item
