from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by domain services."""


class InvalidArgumentError(DomainError, ValueError):
    """Raised when a caller passes malformed parameters (negative limits, empty windows)."""


class RateLimitExceededError(DomainError):
    """Raised when an actor has used up its allowance for the current window."""

    def __init__(self, key: str, retry_after_seconds: int) -> None:
        super().__init__("Too many requests. Please try again later.")
        self.key = key
        self.retry_after_seconds = retry_after_seconds


class RateLimitUnavailableError(DomainError):
    """Raised when the rate-limit store cannot be reached."""
