"""Database module for the Feed API."""

from feed_api.db.models import Base, FeedItem
from feed_api.db.session import create_engine_from_settings, create_sessionmaker, get_session

__all__ = [
    "Base",
    "FeedItem",
    "get_session",
    "create_engine_from_settings",
    "create_sessionmaker",
]
