"""
Admin dashboard and per-user progress views.

Fetches snapshots through the repository and hands them to the pure
aggregation functions. Datastore outages degrade to zeroed statistics or an
empty timeline so the dashboard stays up.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError
from src.domain.errors import InvalidArgumentError
from src.domain.models import (
    ActivityEntry,
    CompletionStatus,
    DashboardStats,
    ItemKind,
    ItemWithStatus,
    OrgRates,
    TrainingAnalytics,
    UserProgress,
)
from src.domain.services.progress import (
    compute_org_rates,
    compute_user_progress,
    merge_activity_timeline,
    merge_item_status,
)

if TYPE_CHECKING:
    from src.infrastructure.repositories.progress import ProgressRepository

logger = structlog.get_logger(__name__)

UPSTREAM_ERRORS = (SQLAlchemyError, OSError)

class DashboardService:
    """Service for dashboard statistics, activity and progress lookups."""

    def __init__(self, repository: ProgressRepository, *, default_activity_limit: int = 10) -> None:
        self.repository = repository
        self.default_activity_limit = default_activity_limit

    async def _onboarding_rates(self) -> OrgRates:
        items = await self.repository.list_onboarding_items()
        records = await self.repository.list_onboarding_records()
        return compute_org_rates(items, records)

    async def _training_rates(self) -> OrgRates:
        items = await self.repository.list_training_items()
        records = await self.repository.list_training_records()
        return compute_org_rates(items, records)

    async def get_admin_stats(self) -> DashboardStats:
        """Document figures use onboarding records only; training figures use assignments."""
        try:
            onboarding = await self._onboarding_rates()
            training = await self._training_rates()
            total_staff = await self.repository.count_active_staff()
            training_modules = await self.repository.count_training_modules()
            pending = await self.repository.count_acknowledgments_by_status(
                CompletionStatus.SUBMITTED
            )
            approved = await self.repository.count_acknowledgments_by_status(
                CompletionStatus.APPROVED
            )
        except UPSTREAM_ERRORS as exc:
            logger.error("dashboard_stats_degraded", error=str(exc), error_type=type(exc).__name__)
            return DashboardStats(degraded=True)

        return DashboardStats(
            total_staff=total_staff,
            pending_documents=pending,
            approved_documents=approved,
            total_submitted=onboarding.total_submitted,
            training_modules=training_modules,
            submission_rate=onboarding.submission_rate,
            onboarding_rate=onboarding.onboarding_rate,
            completion_rate=training.completion_rate,
            avg_score=training.avg_score,
            avg_watch_percentage=training.avg_watch_percentage,
        )

    async def get_recent_activity(self, limit: int | None = None) -> list[ActivityEntry]:
        """Newest-first merge of audit logs, document submissions and HR acknowledgments."""
        if limit is None:
            limit = self.default_activity_limit
        if limit <= 0:
            raise InvalidArgumentError(f"Timeline limit must be positive, got {limit}")

        try:
            audit = await self.repository.recent_audit_entries(limit)
            submissions = await self.repository.recent_submissions(limit)
            acknowledgments = await self.repository.recent_acknowledgments(limit)
        except UPSTREAM_ERRORS as exc:
            logger.error("recent_activity_degraded", error=str(exc), error_type=type(exc).__name__)
            return []

        return merge_activity_timeline(audit, submissions, acknowledgments, limit)

    async def get_training_analytics(self) -> TrainingAnalytics:
        try:
            rates = await self._training_rates()
            total_modules = await self.repository.count_training_modules()
        except UPSTREAM_ERRORS as exc:
            logger.error(
                "training_analytics_degraded", error=str(exc), error_type=type(exc).__name__
            )
            return TrainingAnalytics()
        return TrainingAnalytics(rates=rates, total_modules=total_modules)

    async def get_onboarding_progress(self, user_id: str) -> UserProgress:
        items = await self.repository.list_onboarding_items()
        records = await self.repository.list_onboarding_records(user_id)
        return compute_user_progress(items, records, user_id, kind=ItemKind.ONBOARDING_DOCUMENT)

    async def get_training_progress(self, user_id: str) -> UserProgress:
        items = await self.repository.list_training_items()
        records = await self.repository.list_training_records(user_id)
        return compute_user_progress(items, records, user_id, kind=ItemKind.TRAINING_ASSIGNMENT)

    async def get_onboarding_documents(self, user_id: str) -> list[ItemWithStatus]:
        items = await self.repository.list_onboarding_items()
        records = await self.repository.list_onboarding_records(user_id)
        return merge_item_status(items, records, user_id)
