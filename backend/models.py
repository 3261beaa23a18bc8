"""Pydantic models for the contact endpoints."""

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ContactMessage(BaseModel):
    """Message submitted through the contact form."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    message: str = Field(..., min_length=1, max_length=2000)
