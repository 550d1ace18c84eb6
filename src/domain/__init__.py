from src.domain.errors import (
    DomainError,
    InvalidArgumentError,
    RateLimitExceededError,
    RateLimitUnavailableError,
)
from src.domain.models import (
    AssignableItem,
    CompletionRecord,
    CompletionStatus,
    ItemKind,
)

__all__ = [
    "AssignableItem",
    "CompletionRecord",
    "CompletionStatus",
    "DomainError",
    "InvalidArgumentError",
    "ItemKind",
    "RateLimitExceededError",
    "RateLimitUnavailableError",
]
