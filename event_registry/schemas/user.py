"""
Pydantic schemas for user-related request/response validation.
"""

from pydantic import BaseModel, EmailStr, Field


class RegistrationCreate(BaseModel):
    """Attendee details submitted when registering for an event."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserResponse(BaseModel):
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}
