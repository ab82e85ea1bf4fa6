"""
Pydantic schemas for event-related request/response validation.

Capacity bounds and the future-date rule are checked by the registry, so
that direct callers get the same ValidationError as HTTP clients.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from event_registry.schemas.registration import RegistrationResponse


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    starts_at: datetime
    location: str = Field(..., min_length=1, max_length=200)
    capacity: int
    description: Optional[str] = Field(None, max_length=500)


class EventResponse(BaseModel):
    id: str
    title: str
    starts_at: datetime
    location: str
    capacity: int
    description: Optional[str]
    registrations: list[RegistrationResponse]
    created_at: datetime

    model_config = {"from_attributes": True}


class EventStatsResponse(BaseModel):
    total_registrations: int
    remaining_capacity: int
    capacity_used_percentage: int
    is_upcoming: bool
    availability: str

    model_config = {"from_attributes": True}


class EventSummaryResponse(BaseModel):
    total_events: int
    total_upcoming: int
    total_registrations: int

    model_config = {"from_attributes": True}
