from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from src.domain.models import (
    AcknowledgmentEntry,
    AssignableItem,
    AuditEntry,
    CompletionRecord,
    CompletionStatus,
    ItemKind,
    SubmissionEntry,
)

BASE_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=UTC)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed reference instant."""
    return BASE_TIME + timedelta(minutes=minutes)


def doc(item_id: str, *, required: bool = True, order: int | None = None) -> AssignableItem:
    return AssignableItem(
        id=item_id,
        kind=ItemKind.ONBOARDING_DOCUMENT,
        is_required=required,
        title=f"Document {item_id}",
        order_index=order,
    )


def module(item_id: str, *, required: bool = True) -> AssignableItem:
    return AssignableItem(
        id=item_id,
        kind=ItemKind.TRAINING_ASSIGNMENT,
        is_required=required,
        title=f"Module {item_id}",
    )


def record(
    item_id: str,
    user_id: str = "user-1",
    status: CompletionStatus = CompletionStatus.PENDING,
    **fields: Any,
) -> CompletionRecord:
    return CompletionRecord(item_id=item_id, user_id=user_id, status=status, **fields)


class FakeProgressRepository:
    """In-memory stand-in for ProgressRepository used by API tests."""

    def __init__(
        self,
        items: Sequence[AssignableItem] = (),
        records: Sequence[CompletionRecord] = (),
        *,
        audit: Sequence[AuditEntry] = (),
        submissions: Sequence[SubmissionEntry] = (),
        acknowledgments: Sequence[AcknowledgmentEntry] = (),
        total_staff: int = 0,
        fail: bool = False,
    ) -> None:
        self.items = list(items)
        self.records = list(records)
        self.audit = list(audit)
        self.submissions = list(submissions)
        self.acknowledgments = list(acknowledgments)
        self.total_staff = total_staff
        self.fail = fail
        self.inquiries: list[dict[str, Any]] = []

    def _check(self) -> None:
        if self.fail:
            raise SQLAlchemyError("database unavailable")

    def _records(self, kind: ItemKind, user_id: str | None) -> list[CompletionRecord]:
        ids = {item.id for item in self.items if item.kind == kind}
        return [
            r
            for r in self.records
            if r.item_id in ids and (user_id is None or r.user_id == user_id)
        ]

    async def list_onboarding_items(self) -> list[AssignableItem]:
        self._check()
        return [i for i in self.items if i.kind == ItemKind.ONBOARDING_DOCUMENT]

    async def list_training_items(self) -> list[AssignableItem]:
        self._check()
        return [i for i in self.items if i.kind == ItemKind.TRAINING_ASSIGNMENT]

    async def list_onboarding_records(self, user_id: str | None = None) -> list[CompletionRecord]:
        self._check()
        return self._records(ItemKind.ONBOARDING_DOCUMENT, user_id)

    async def list_training_records(self, user_id: str | None = None) -> list[CompletionRecord]:
        self._check()
        return self._records(ItemKind.TRAINING_ASSIGNMENT, user_id)

    async def count_active_staff(self) -> int:
        self._check()
        return self.total_staff

    async def count_training_modules(self) -> int:
        self._check()
        return len([i for i in self.items if i.kind == ItemKind.TRAINING_ASSIGNMENT])

    async def count_acknowledgments_by_status(self, status: CompletionStatus) -> int:
        records = await self.list_onboarding_records()
        return sum(1 for r in records if r.status == status)

    async def recent_audit_entries(self, limit: int) -> list[AuditEntry]:
        self._check()
        return self.audit[:limit]

    async def recent_submissions(self, limit: int) -> list[SubmissionEntry]:
        self._check()
        return self.submissions[:limit]

    async def recent_acknowledgments(self, limit: int) -> list[AcknowledgmentEntry]:
        self._check()
        return self.acknowledgments[:limit]

    async def save_contact_inquiry(self, **fields: Any) -> SimpleNamespace:
        self._check()
        inquiry = SimpleNamespace(id=f"inquiry-{len(self.inquiries) + 1}", **fields)
        self.inquiries.append(fields)
        return inquiry
