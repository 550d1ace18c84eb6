from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class ItemKind(str, enum.Enum):
    ONBOARDING_DOCUMENT = "onboarding_document"
    TRAINING_ASSIGNMENT = "training_assignment"


class CompletionStatus(str, enum.Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    EXPIRED = "expired"

    @classmethod
    def terminal_success(cls) -> tuple[CompletionStatus, ...]:
        return (cls.COMPLETED, cls.APPROVED)

    @property
    def is_terminal_success(self) -> bool:
        return self in self.terminal_success()


@dataclass(slots=True, frozen=True)
class AssignableItem:
    """A unit of required work: an onboarding document or a training assignment."""

    id: str
    kind: ItemKind
    is_required: bool = True
    title: str | None = None
    order_index: int | None = None


@dataclass(slots=True, frozen=True)
class CompletionRecord:
    """One user's interaction with one assignable item."""

    item_id: str
    user_id: str
    status: CompletionStatus = CompletionStatus.PENDING
    completed_at: datetime | None = None
    acknowledged_at: datetime | None = None
    score: float | None = None
    watched_percentage: float | None = None
    signature_url: str | None = None
    form_data: dict[str, Any] | None = None
    id: str | None = None
    updated_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class ItemWithStatus:
    """An item annotated with the requesting user's progress on it."""

    item: AssignableItem
    status: CompletionStatus = CompletionStatus.PENDING
    acknowledged_at: datetime | None = None
    signature_url: str | None = None
    form_data: dict[str, Any] | None = None
    record_id: str | None = None


@dataclass(slots=True, frozen=True)
class UserProgress:
    total: int = 0
    completed: int = 0
    percentage: int = 0
    is_complete: bool = False


@dataclass(slots=True, frozen=True)
class OrgRates:
    """Organisation-wide completion metrics, all rounded to whole numbers."""

    submission_rate: int = 0
    onboarding_rate: int = 0
    completion_rate: int = 0
    avg_score: int = 0
    avg_watch_percentage: int = 0
    total_assignments: int = 0
    total_submitted: int = 0
    total_completions: int = 0
    in_progress_count: int = 0


@dataclass(slots=True, frozen=True)
class TrainingAnalytics:
    rates: OrgRates = field(default_factory=OrgRates)
    total_modules: int = 0


@dataclass(slots=True, frozen=True)
class AuditEntry:
    id: str
    action: str
    created_at: datetime
    changes: dict[str, Any] | None = None


@dataclass(slots=True, frozen=True)
class SubmissionEntry:
    id: str
    completed_at: datetime
    user_name: str | None = None
    document_title: str | None = None
    document_type: str | None = None


@dataclass(slots=True, frozen=True)
class AcknowledgmentEntry:
    id: str
    acknowledged_at: datetime
    user_name: str | None = None
    record_title: str | None = None
    record_type: str | None = None


@dataclass(slots=True, frozen=True)
class ActivityEntry:
    id: str
    type: str
    action: str
    description: str
    timestamp: datetime
    user_name: str | None = None


@dataclass(slots=True)
class RateLimitWindow:
    """Counter state for one rate-limited identifier."""

    key: str
    count: int
    reset_time: int


@dataclass(slots=True, frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after_seconds: int | None = None


@dataclass(slots=True)
class DashboardStats:
    """Admin dashboard counters; all zero when the datastore is unavailable."""

    total_staff: int = 0
    pending_documents: int = 0
    approved_documents: int = 0
    total_submitted: int = 0
    training_modules: int = 0
    submission_rate: int = 0
    onboarding_rate: int = 0
    completion_rate: int = 0
    avg_score: int = 0
    avg_watch_percentage: int = 0
    degraded: bool = False
