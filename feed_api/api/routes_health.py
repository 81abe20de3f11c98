"""Health check endpoints for the Feed API."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from feed_api.db.session import get_session

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def health_check():
    """
    Health check endpoint.

    Returns:
        A simple status object indicating the service is healthy
    """
    return {"ok": True}


@router.get("/readyz")
async def readiness_check(db: AsyncSession = Depends(get_session)):
    """
    Readiness check endpoint.

    Runs a trivial query so the service only reports ready when the
    database is reachable.
    """
    await db.execute(text("SELECT 1"))
    return {"ok": True}
