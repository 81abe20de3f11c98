"""Feed item presentation: response models and URL signing."""

from .models import FeedItemOut, FeedListOut
from .signing import sign_feed_item, sign_feed_items

__all__ = ["FeedItemOut", "FeedListOut", "sign_feed_item", "sign_feed_items"]
