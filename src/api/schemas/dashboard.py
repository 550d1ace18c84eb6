from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    total_staff: int
    pending_documents: int
    approved_documents: int
    total_submitted: int
    training_modules: int
    submission_rate: int
    onboarding_rate: int
    completion_rate: int
    avg_score: int
    avg_watch_percentage: int
    degraded: bool = False


class ActivityItem(BaseModel):
    id: str
    type: str
    action: str
    description: str
    timestamp: datetime
    user_name: str | None = None


class ActivityResponse(BaseModel):
    activities: list[ActivityItem]


class TrainingAnalyticsResponse(BaseModel):
    total_modules: int
    total_assignments: int
    total_completions: int
    in_progress_count: int
    completion_rate: int
    avg_score: int
    avg_watch_percentage: int
