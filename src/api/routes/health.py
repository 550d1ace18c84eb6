from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request
from sqlalchemy import text
from src.core.config import get_settings
from src.infrastructure.db.session import get_session_factory
from src.libs.redis_window_store import RedisWindowStore

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_postgres() -> dict:
    """Check PostgreSQL connection."""
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
            return {"status": "ok"}
    except Exception as e:
        return {"status": "error", "message": str(e)[:100]}


def check_rate_limit_store(request: Request) -> dict:
    """Check the rate limiter's backing store."""
    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return {"status": "error", "message": "rate limiter not initialised"}
    store = limiter.store
    if isinstance(store, RedisWindowStore):
        return {"status": "ok" if store.ping() else "error", "backend": "redis"}
    return {"status": "ok", "backend": "memory"}


@router.get("/health", summary="Service health probe")
async def health_check(request: Request) -> dict:
    """Return basic service and datastore status information."""
    settings = get_settings()

    postgres_status = await check_postgres()
    rate_limit_status = await asyncio.to_thread(check_rate_limit_store, request)

    overall_status = "ok"
    if postgres_status.get("status") != "ok" or rate_limit_status.get("status") != "ok":
        overall_status = "degraded"

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": overall_status,
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {
            "postgres": postgres_status,
            "rate_limit": rate_limit_status,
        },
    }
    logger.info("health_probe", **payload)
    return payload
