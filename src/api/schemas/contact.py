from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    email: EmailStr = Field(..., description="Sender email address")
    phone: str | None = None
    subject: str = Field(..., min_length=5, description="Subject must be at least 5 characters")
    message: str = Field(..., min_length=10, description="Message must be at least 10 characters")


class ContactResponse(BaseModel):
    success: bool = True
    inquiry_id: str
    message: str
