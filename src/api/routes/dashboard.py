from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query
from src.api.deps import get_dashboard_service
from src.api.schemas.dashboard import (
    ActivityItem,
    ActivityResponse,
    DashboardStatsResponse,
    TrainingAnalyticsResponse,
)
from src.domain.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
logger = structlog.get_logger()


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStatsResponse:
    """Aggregate staff, onboarding and training counters for the admin dashboard."""
    stats = await service.get_admin_stats()
    return DashboardStatsResponse(
        total_staff=stats.total_staff,
        pending_documents=stats.pending_documents,
        approved_documents=stats.approved_documents,
        total_submitted=stats.total_submitted,
        training_modules=stats.training_modules,
        submission_rate=stats.submission_rate,
        onboarding_rate=stats.onboarding_rate,
        completion_rate=stats.completion_rate,
        avg_score=stats.avg_score,
        avg_watch_percentage=stats.avg_watch_percentage,
        degraded=stats.degraded,
    )


@router.get("/activity", response_model=ActivityResponse)
async def get_activity(
    limit: int | None = Query(default=None, description="Maximum number of entries"),
    service: DashboardService = Depends(get_dashboard_service),
) -> ActivityResponse:
    """Most recent audit, submission and HR acknowledgment events, newest first."""
    activities = await service.get_recent_activity(limit)
    return ActivityResponse(
        activities=[
            ActivityItem(
                id=entry.id,
                type=entry.type,
                action=entry.action,
                description=entry.description,
                timestamp=entry.timestamp,
                user_name=entry.user_name,
            )
            for entry in activities
        ]
    )


@router.get("/training-analytics", response_model=TrainingAnalyticsResponse)
async def get_training_analytics(
    service: DashboardService = Depends(get_dashboard_service),
) -> TrainingAnalyticsResponse:
    analytics = await service.get_training_analytics()
    rates = analytics.rates
    return TrainingAnalyticsResponse(
        total_modules=analytics.total_modules,
        total_assignments=rates.total_assignments,
        total_completions=rates.total_completions,
        in_progress_count=rates.in_progress_count,
        completion_rate=rates.completion_rate,
        avg_score=rates.avg_score,
        avg_watch_percentage=rates.avg_watch_percentage,
    )
