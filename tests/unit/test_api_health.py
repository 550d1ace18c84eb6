from unittest.mock import MagicMock

import redis
from fastapi.testclient import TestClient
from src.api.main import create_app
from src.domain.services.rate_limit import RateLimiter
from src.libs.redis_window_store import RedisWindowStore


def test_health_endpoint_returns_service_metadata(test_client: TestClient) -> None:
    response = test_client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["service"]
    # Status can be "ok" or "degraded" depending on datastore availability
    assert payload["status"] in ["ok", "degraded"]
    assert "postgres" in payload["datastores"]
    assert payload["datastores"]["rate_limit"] == {"status": "ok", "backend": "memory"}


def test_health_echoes_request_id(test_client: TestClient) -> None:
    response = test_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_health_reports_unreachable_redis_store() -> None:
    redis_client = MagicMock()
    redis_client.ping.side_effect = redis.ConnectionError("refused")
    app = create_app(rate_limiter=RateLimiter(store=RedisWindowStore(client=redis_client)))

    with TestClient(app) as client:
        response = client.get("/health")

    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["datastores"]["rate_limit"] == {"status": "error", "backend": "redis"}
