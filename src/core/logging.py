from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_CONFIGURED = False


def resolve_level(name: str | int) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""
    if isinstance(name, int):
        return name
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure structlog to emit JSON logs with contextvars support."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric_level = resolve_level(level)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        stream=sys.stdout,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True
