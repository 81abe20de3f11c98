"""Pydantic models for feed API responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FeedItemOut(BaseModel):
    """A feed item as sent to clients.

    Depending on the route, ``url`` is either the raw storage key or a signed
    GET URL for it.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    caption: str
    url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FeedListOut(BaseModel):
    """Response model for the feed listing."""

    count: int
    rows: list[FeedItemOut]


class SignedUrlOut(BaseModel):
    """Response model for a signed upload URL."""

    url: str
