"""
Pydantic schema for user-facing notifications.
"""

from datetime import datetime
from pydantic import BaseModel


class NotificationResponse(BaseModel):
    title: str
    description: str
    variant: str
    created_at: datetime

    model_config = {"from_attributes": True}
