"""
Public contact form intake, throttled per sender address.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from src.core.config import Settings, get_settings
from src.domain.errors import RateLimitExceededError
from src.domain.services.rate_limit import RateLimiter

if TYPE_CHECKING:
    from src.infrastructure.repositories.progress import ProgressRepository

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ContactSubmission:
    name: str
    email: str
    subject: str
    message: str
    phone: str | None = None


@dataclass(slots=True)
class ContactResult:
    inquiry_id: str
    remaining: int
    message: str = "Thank you for your message. We will get back to you soon!"


def contact_rate_key(email: str) -> str:
    return f"contact:{email.strip().lower()}"


class ContactService:
    """Stores contact inquiries after checking the sender's allowance."""

    def __init__(
        self,
        repository: ProgressRepository,
        limiter: RateLimiter,
        settings: Settings | None = None,
    ) -> None:
        self.repository = repository
        self.limiter = limiter
        self.settings = settings or get_settings()

    async def submit(self, submission: ContactSubmission) -> ContactResult:
        key = contact_rate_key(submission.email)
        # Window stores may block on the network; keep them off the event loop
        decision = await asyncio.to_thread(
            self.limiter.check_and_consume,
            key,
            self.settings.contact_rate_limit,
            self.settings.contact_rate_window_ms,
        )
        if not decision.allowed:
            raise RateLimitExceededError(key, decision.retry_after_seconds or 0)

        inquiry = await self.repository.save_contact_inquiry(
            name=submission.name,
            email=submission.email,
            phone=submission.phone,
            subject=submission.subject,
            message=submission.message,
        )
        logger.info(
            "contact_inquiry_received",
            inquiry_id=inquiry.id,
            remaining=decision.remaining,
        )
        return ContactResult(inquiry_id=inquiry.id, remaining=decision.remaining)
