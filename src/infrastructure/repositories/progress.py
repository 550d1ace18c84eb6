"""
Read side of the staff progress tables.

Converts ORM rows into the plain domain collections the aggregation functions
work on, so those functions never see a session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload
from src.domain.models import (
    AcknowledgmentEntry,
    AssignableItem,
    AuditEntry,
    CompletionRecord,
    CompletionStatus,
    ItemKind,
    SubmissionEntry,
)
from src.infrastructure.db.models import (
    AuditLog,
    ContactInquiry,
    DocumentAcknowledgment,
    DocumentType,
    HRRecord,
    OnboardingDocument,
    ProgressStatus,
    TrainingAssignment,
    TrainingModule,
    UserModel,
    UserRole,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)


def _status(value: ProgressStatus | str) -> CompletionStatus:
    return CompletionStatus(value.value if hasattr(value, "value") else str(value))


class ProgressRepository:
    """Loads onboarding and training progress as domain objects."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_onboarding_items(self) -> list[AssignableItem]:
        stmt = (
            select(OnboardingDocument)
            .where(OnboardingDocument.document_type == DocumentType.ONBOARDING)
            .order_by(OnboardingDocument.order_index, OnboardingDocument.created_at)
        )
        documents = (await self.session.execute(stmt)).scalars().all()
        return [
            AssignableItem(
                id=doc.id,
                kind=ItemKind.ONBOARDING_DOCUMENT,
                is_required=doc.is_required,
                title=doc.title,
                order_index=doc.order_index,
            )
            for doc in documents
        ]

    async def list_training_items(self) -> list[AssignableItem]:
        stmt = select(TrainingModule).order_by(TrainingModule.created_at)
        modules = (await self.session.execute(stmt)).scalars().all()
        return [
            AssignableItem(
                id=module.id,
                kind=ItemKind.TRAINING_ASSIGNMENT,
                is_required=module.is_mandatory,
                title=module.title,
            )
            for module in modules
        ]

    async def list_onboarding_records(self, user_id: str | None = None) -> list[CompletionRecord]:
        stmt = select(DocumentAcknowledgment)
        if user_id is not None:
            stmt = stmt.where(DocumentAcknowledgment.user_id == user_id)
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            CompletionRecord(
                id=row.id,
                item_id=row.document_id,
                user_id=row.user_id,
                status=_status(row.status),
                completed_at=row.completed_at,
                acknowledged_at=row.acknowledged_at,
                signature_url=row.signature_url,
                form_data=row.form_data,
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    async def list_training_records(self, user_id: str | None = None) -> list[CompletionRecord]:
        stmt = select(TrainingAssignment)
        if user_id is not None:
            stmt = stmt.where(TrainingAssignment.user_id == user_id)
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            CompletionRecord(
                id=row.id,
                item_id=row.module_id,
                user_id=row.user_id,
                status=_status(row.status),
                completed_at=row.completed_at,
                score=row.score,
                watched_percentage=row.watched_percentage,
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    async def count_active_staff(self) -> int:
        stmt = select(func.count(UserModel.id)).where(
            UserModel.role == UserRole.STAFF,
            UserModel.is_active == True,  # noqa: E712
        )
        return int(await self.session.scalar(stmt) or 0)

    async def count_training_modules(self) -> int:
        return int(await self.session.scalar(select(func.count(TrainingModule.id))) or 0)

    async def count_acknowledgments_by_status(self, status: CompletionStatus) -> int:
        stmt = select(func.count(DocumentAcknowledgment.id)).where(
            DocumentAcknowledgment.status == ProgressStatus(status.value)
        )
        return int(await self.session.scalar(stmt) or 0)

    async def recent_audit_entries(self, limit: int) -> list[AuditEntry]:
        stmt = select(AuditLog).order_by(AuditLog.created_at.desc()).limit(limit)
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            AuditEntry(id=row.id, action=row.action, created_at=row.created_at, changes=row.changes)
            for row in rows
        ]

    async def recent_submissions(self, limit: int) -> list[SubmissionEntry]:
        stmt = (
            select(DocumentAcknowledgment)
            .where(DocumentAcknowledgment.completed_at.is_not(None))
            .options(
                selectinload(DocumentAcknowledgment.user),
                selectinload(DocumentAcknowledgment.document),
            )
            .order_by(DocumentAcknowledgment.completed_at.desc())
            .limit(limit)
        )
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            SubmissionEntry(
                id=row.id,
                completed_at=row.completed_at,
                user_name=row.user.full_name if row.user else None,
                document_title=row.document.title if row.document else None,
                document_type=row.document.document_type.value if row.document else None,
            )
            for row in rows
        ]

    async def recent_acknowledgments(self, limit: int) -> list[AcknowledgmentEntry]:
        stmt = (
            select(HRRecord)
            .where(HRRecord.acknowledged_at.is_not(None))
            .options(selectinload(HRRecord.user))
            .order_by(HRRecord.acknowledged_at.desc())
            .limit(limit)
        )
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            AcknowledgmentEntry(
                id=row.id,
                acknowledged_at=row.acknowledged_at,
                user_name=row.user.full_name if row.user else None,
                record_title=row.title,
                record_type=row.record_type,
            )
            for row in rows
        ]

    async def save_contact_inquiry(
        self,
        *,
        name: str,
        email: str,
        subject: str,
        message: str,
        phone: str | None = None,
    ) -> ContactInquiry:
        inquiry = ContactInquiry(
            name=name,
            email=email,
            phone=phone,
            subject=subject,
            message=message,
            status="new",
        )
        self.session.add(inquiry)
        await self.session.commit()
        await self.session.refresh(inquiry)
        logger.info("contact_inquiry_stored", inquiry_id=inquiry.id)
        return inquiry
