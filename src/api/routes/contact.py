from __future__ import annotations

from fastapi import APIRouter, Depends, status
from src.api.deps import get_contact_service
from src.api.schemas.contact import ContactRequest, ContactResponse
from src.domain.services.contact import ContactService, ContactSubmission

router = APIRouter(prefix="/contact", tags=["Contact"])


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    payload: ContactRequest,
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Record a public contact inquiry; senders are limited per email address."""
    result = await service.submit(
        ContactSubmission(
            name=payload.name,
            email=str(payload.email),
            phone=payload.phone,
            subject=payload.subject,
            message=payload.message,
        )
    )
    return ContactResponse(inquiry_id=result.inquiry_id, message=result.message)
