"""Shared library helpers."""

from src.libs.clock import Clock, FixedClock, SystemClock
from src.libs.redis_window_store import RedisWindowStore

__all__ = [
    "Clock",
    "FixedClock",
    "RedisWindowStore",
    "SystemClock",
]
