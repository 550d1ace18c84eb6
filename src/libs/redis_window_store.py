"""
Redis-backed rate-limit windows for deployments running several workers.

The check-and-increment runs as one Lua script so that concurrent callers in
different processes observe the same counter.
"""

from __future__ import annotations

from typing import Any

import redis
import structlog
from src.core.config import get_settings
from src.domain.errors import RateLimitUnavailableError
from src.domain.models import RateLimitWindow

logger = structlog.get_logger(__name__)

KEY_PREFIX = "rate-limit:"

# KEYS[1] = window hash; ARGV[1] = now (ms); ARGV[2] = window length (ms)
CONSUME_SCRIPT = """
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local reset = redis.call('HGET', KEYS[1], 'reset_time')
if (not reset) or now > tonumber(reset) then
    local reset_time = now + window
    redis.call('HSET', KEYS[1], 'count', 1, 'reset_time', reset_time)
    redis.call('PEXPIRE', KEYS[1], window + 1000)
    return {1, reset_time}
end
local count = redis.call('HINCRBY', KEYS[1], 'count', 1)
return {count, tonumber(reset)}
"""


class RedisWindowStore:
    """Window store shared across processes through Redis."""

    def __init__(self, client: Any | None = None, url: str | None = None) -> None:
        if client is None:
            client = redis.Redis.from_url(url or get_settings().redis_url)
        self.client = client
        self._consume = client.register_script(CONSUME_SCRIPT)

    @staticmethod
    def _redis_key(key: str) -> str:
        return f"{KEY_PREFIX}{key}"

    def consume(self, key: str, window_ms: int, now: int) -> RateLimitWindow:
        try:
            count, reset_time = self._consume(keys=[self._redis_key(key)], args=[now, window_ms])
        except redis.RedisError as exc:
            logger.error("redis_window_store_failed", key=key, error=str(exc))
            raise RateLimitUnavailableError("Rate limit store unavailable") from exc
        return RateLimitWindow(key=key, count=int(count), reset_time=int(reset_time))

    def clear(self, key: str) -> None:
        self.client.delete(self._redis_key(key))

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as exc:
            logger.warning("redis_window_store_unreachable", error=str(exc))
            return False
