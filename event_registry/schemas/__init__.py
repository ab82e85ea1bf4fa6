from event_registry.schemas.user import RegistrationCreate, UserResponse
from event_registry.schemas.registration import RegistrationResponse, RegistrationCancelResponse
from event_registry.schemas.event import (
    EventCreate, EventResponse, EventStatsResponse, EventSummaryResponse,
)
from event_registry.schemas.notification import NotificationResponse

__all__ = [
    "RegistrationCreate", "UserResponse",
    "RegistrationResponse", "RegistrationCancelResponse",
    "EventCreate", "EventResponse", "EventStatsResponse", "EventSummaryResponse",
    "NotificationResponse",
]
