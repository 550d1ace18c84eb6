"""
Fixed-window request throttling keyed by caller-built identifiers.

A window opens on the first request for a key and lasts ``window_ms``. Every
request inside it, rejected ones included, bumps the counter; the window is
replaced wholesale once ``now`` is strictly past its reset time.
"""

from __future__ import annotations

import math
import threading
from typing import Protocol

import structlog
from src.domain.errors import InvalidArgumentError
from src.domain.models import RateLimitDecision, RateLimitWindow
from src.libs.clock import Clock, SystemClock

logger = structlog.get_logger(__name__)


class WindowStore(Protocol):
    """Holds per-key windows; ``consume`` must be atomic for a given key."""

    def consume(self, key: str, window_ms: int, now: int) -> RateLimitWindow: ...

    def clear(self, key: str) -> None: ...


class InMemoryWindowStore:
    """Process-local window table.

    Keys hash onto a fixed set of lock stripes, so the lock count stays at
    ``stripes`` however many identifiers pass through. Keys sharing a stripe
    serialise against each other.
    """

    def __init__(self, stripes: int = 64) -> None:
        if stripes <= 0:
            raise InvalidArgumentError(f"Lock stripe count must be positive, got {stripes}")
        self._windows: dict[str, RateLimitWindow] = {}
        self._locks = tuple(threading.Lock() for _ in range(stripes))

    def _lock_for(self, key: str) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    def consume(self, key: str, window_ms: int, now: int) -> RateLimitWindow:
        with self._lock_for(key):
            window = self._windows.get(key)
            if window is None or now > window.reset_time:
                window = RateLimitWindow(key=key, count=1, reset_time=now + window_ms)
                self._windows[key] = window
            else:
                window.count += 1
            return RateLimitWindow(key=key, count=window.count, reset_time=window.reset_time)

    def clear(self, key: str) -> None:
        with self._lock_for(key):
            self._windows.pop(key, None)

    def get(self, key: str) -> RateLimitWindow | None:
        window = self._windows.get(key)
        if window is None:
            return None
        return RateLimitWindow(key=key, count=window.count, reset_time=window.reset_time)


class RateLimiter:
    """Admits or rejects actions per key under a fixed-window count."""

    def __init__(self, store: WindowStore | None = None, clock: Clock | None = None) -> None:
        self.store = store if store is not None else InMemoryWindowStore()
        self.clock = clock if clock is not None else SystemClock()

    def check_and_consume(
        self,
        key: str,
        limit: int,
        window_ms: int,
        now: int | None = None,
    ) -> RateLimitDecision:
        if limit <= 0:
            raise InvalidArgumentError(f"Rate limit must be positive, got {limit}")
        if window_ms <= 0:
            raise InvalidArgumentError(f"Rate limit window must be positive, got {window_ms}")

        if now is None:
            now = self.clock.now_ms()

        window = self.store.consume(key, window_ms, now)

        if window.count > limit:
            retry_after = math.ceil((window.reset_time - now) / 1000)
            logger.info(
                "rate_limit_rejected",
                key=key,
                count=window.count,
                limit=limit,
                retry_after_seconds=retry_after,
            )
            return RateLimitDecision(allowed=False, remaining=0, retry_after_seconds=retry_after)

        return RateLimitDecision(allowed=True, remaining=limit - window.count)

    def clear(self, key: str) -> None:
        self.store.clear(key)
        logger.debug("rate_limit_cleared", key=key)
