from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from src.api.deps import get_progress_repository
from src.api.main import create_app
from src.domain.models import CompletionStatus
from src.domain.services.rate_limit import InMemoryWindowStore, RateLimiter
from src.libs.clock import FixedClock

from tests.utils import FakeProgressRepository, at, doc, module, record


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(start_ms=0)


@pytest.fixture()
def limiter(clock: FixedClock) -> RateLimiter:
    """Isolated limiter with its own window table and a hand-driven clock."""
    return RateLimiter(store=InMemoryWindowStore(), clock=clock)


@pytest.fixture()
def fake_repository() -> FakeProgressRepository:
    items = [
        doc("doc-a", order=1),
        doc("doc-b", order=2),
        doc("doc-c", required=False, order=3),
        module("mod-1"),
        module("mod-2", required=False),
    ]
    records = [
        record("doc-a", "user-1", CompletionStatus.COMPLETED, completed_at=at(1)),
        record("doc-b", "user-1", CompletionStatus.SUBMITTED, completed_at=at(2)),
        record("doc-a", "user-2", CompletionStatus.APPROVED, completed_at=at(3)),
        record("doc-b", "user-2"),
        record("mod-1", "user-1", CompletionStatus.COMPLETED, score=90, watched_percentage=100),
        record("mod-1", "user-2", CompletionStatus.IN_PROGRESS, watched_percentage=40),
    ]
    return FakeProgressRepository(items, records, total_staff=2)


@pytest.fixture()
def test_client(
    fake_repository: FakeProgressRepository, limiter: RateLimiter
) -> Iterator[TestClient]:
    app = create_app(rate_limiter=limiter)
    app.dependency_overrides[get_progress_repository] = lambda: fake_repository
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
