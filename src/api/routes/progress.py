from __future__ import annotations

from fastapi import APIRouter, Depends
from src.api.deps import get_dashboard_service
from src.api.schemas.progress import (
    DocumentStatusItem,
    DocumentStatusResponse,
    ProgressResponse,
)
from src.domain.models import UserProgress
from src.domain.services.dashboard import DashboardService

router = APIRouter(prefix="/users/{user_id}", tags=["Progress"])


def _progress_response(user_id: str, progress: UserProgress) -> ProgressResponse:
    return ProgressResponse(
        user_id=user_id,
        total=progress.total,
        completed=progress.completed,
        percentage=progress.percentage,
        is_complete=progress.is_complete,
    )


@router.get("/onboarding/progress", response_model=ProgressResponse)
async def get_onboarding_progress(
    user_id: str,
    service: DashboardService = Depends(get_dashboard_service),
) -> ProgressResponse:
    """Required onboarding documents completed by the user."""
    return _progress_response(user_id, await service.get_onboarding_progress(user_id))


@router.get("/onboarding/documents", response_model=DocumentStatusResponse)
async def get_onboarding_documents(
    user_id: str,
    service: DashboardService = Depends(get_dashboard_service),
) -> DocumentStatusResponse:
    """Every onboarding document with the user's status on it."""
    merged = await service.get_onboarding_documents(user_id)
    return DocumentStatusResponse(
        user_id=user_id,
        documents=[
            DocumentStatusItem(
                id=entry.item.id,
                title=entry.item.title,
                is_required=entry.item.is_required,
                order_index=entry.item.order_index,
                status=entry.status.value,
                acknowledged_at=entry.acknowledged_at,
                signature_url=entry.signature_url,
                form_data=entry.form_data,
                acknowledgment_id=entry.record_id,
            )
            for entry in merged
        ],
    )


@router.get("/training/progress", response_model=ProgressResponse)
async def get_training_progress(
    user_id: str,
    service: DashboardService = Depends(get_dashboard_service),
) -> ProgressResponse:
    """Mandatory training modules completed by the user."""
    return _progress_response(user_id, await service.get_training_progress(user_id))
