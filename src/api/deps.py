from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.config import Settings, get_settings
from src.domain.services.contact import ContactService
from src.domain.services.dashboard import DashboardService
from src.domain.services.rate_limit import InMemoryWindowStore, RateLimiter
from src.infrastructure.db.session import get_session
from src.infrastructure.repositories.progress import ProgressRepository
from src.libs.clock import SystemClock
from src.libs.redis_window_store import RedisWindowStore


def build_rate_limiter(settings: Settings) -> RateLimiter:
    """Construct the process-wide limiter for the configured backend."""
    if settings.rate_limit_backend == "redis":
        store = RedisWindowStore(url=settings.redis_url)
    elif settings.rate_limit_backend == "memory":
        store = InMemoryWindowStore()
    else:
        raise ValueError(f"Unsupported rate limit backend: {settings.rate_limit_backend}")
    return RateLimiter(store=store, clock=SystemClock())


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in get_session():
        yield session


def get_progress_repository(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> ProgressRepository:
    return ProgressRepository(session)


def get_rate_limiter(request: Request) -> RateLimiter:
    """Return the limiter created at startup and held on the application state."""
    return request.app.state.rate_limiter


def get_dashboard_service(
    repository: ProgressRepository = Depends(get_progress_repository),  # noqa: B008
) -> DashboardService:
    settings = get_settings()
    return DashboardService(repository, default_activity_limit=settings.activity_default_limit)


def get_contact_service(
    repository: ProgressRepository = Depends(get_progress_repository),  # noqa: B008
    limiter: RateLimiter = Depends(get_rate_limiter),  # noqa: B008
) -> ContactService:
    return ContactService(repository, limiter, get_settings())
