"""
Pydantic schemas for registration request/response validation.
"""

from datetime import datetime
from pydantic import BaseModel

from event_registry.schemas.user import UserResponse


class RegistrationResponse(BaseModel):
    id: str
    user_id: str
    event_id: str
    user: UserResponse
    registered_at: datetime

    model_config = {"from_attributes": True}


class RegistrationCancelResponse(BaseModel):
    message: str
    event_id: str
    user_id: str
