from __future__ import annotations

from unittest.mock import MagicMock

import redis
from fastapi.testclient import TestClient
from src.api.deps import get_progress_repository
from src.api.main import create_app
from src.domain.services.rate_limit import RateLimiter
from src.libs.clock import FixedClock
from src.libs.redis_window_store import RedisWindowStore

from tests.utils import FakeProgressRepository


def contact_payload(email: str = "jo@example.com") -> dict[str, str]:
    return {
        "name": "Jo Bloggs",
        "email": email,
        "subject": "Pricing question",
        "message": "Do you offer a discount for charities?",
    }


def test_submission_is_stored(
    test_client: TestClient, fake_repository: FakeProgressRepository
) -> None:
    response = test_client.post("/contact", json=contact_payload())

    assert response.status_code == 201
    assert response.json()["inquiry_id"] == "inquiry-1"
    assert fake_repository.inquiries[0]["email"] == "jo@example.com"


def test_sixth_submission_within_hour_is_throttled(test_client: TestClient) -> None:
    for _ in range(5):
        assert test_client.post("/contact", json=contact_payload()).status_code == 201

    response = test_client.post("/contact", json=contact_payload())

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "3600"
    assert response.json()["retry_after"] == 3600


def test_throttle_key_ignores_email_case(test_client: TestClient) -> None:
    for _ in range(5):
        test_client.post("/contact", json=contact_payload("jo@example.com"))

    response = test_client.post("/contact", json=contact_payload("JO@example.com"))

    assert response.status_code == 429


def test_window_expiry_reopens_submissions(
    test_client: TestClient, clock: FixedClock
) -> None:
    for _ in range(6):
        test_client.post("/contact", json=contact_payload())

    clock.advance(3_600_001)

    assert test_client.post("/contact", json=contact_payload()).status_code == 201


def test_cleared_key_can_submit_again(test_client: TestClient, limiter: RateLimiter) -> None:
    for _ in range(6):
        test_client.post("/contact", json=contact_payload())

    limiter.clear("contact:jo@example.com")

    assert test_client.post("/contact", json=contact_payload()).status_code == 201


def test_invalid_payload_rejected(
    test_client: TestClient, fake_repository: FakeProgressRepository
) -> None:
    payload = contact_payload()
    payload["message"] = "short"

    response = test_client.post("/contact", json=payload)

    assert response.status_code == 422
    assert fake_repository.inquiries == []


def test_unreachable_rate_limit_store_is_service_unavailable(
    fake_repository: FakeProgressRepository,
) -> None:
    redis_client = MagicMock()
    redis_client.register_script.return_value.side_effect = redis.ConnectionError("refused")
    app = create_app(
        rate_limiter=RateLimiter(store=RedisWindowStore(client=redis_client), clock=FixedClock())
    )
    app.dependency_overrides[get_progress_repository] = lambda: fake_repository

    with TestClient(app) as client:
        response = client.post("/contact", json=contact_payload())

    assert response.status_code == 503
    assert fake_repository.inquiries == []
