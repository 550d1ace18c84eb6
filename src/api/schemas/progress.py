from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ProgressResponse(BaseModel):
    user_id: str
    total: int
    completed: int
    percentage: int
    is_complete: bool


class DocumentStatusItem(BaseModel):
    id: str
    title: str | None = None
    is_required: bool
    order_index: int | None = None
    status: str
    acknowledged_at: datetime | None = None
    signature_url: str | None = None
    form_data: dict[str, Any] | None = None
    acknowledgment_id: str | None = None


class DocumentStatusResponse(BaseModel):
    user_id: str
    documents: list[DocumentStatusItem]
