"""
Event model with registration tracking.

Key design decisions:
- Registrations are held on the event itself, in registration order
- Registration count is never denormalized; stats are derived on read
- Invariant: len(registrations) <= capacity
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from event_registry.models.registration import Registration


@dataclass
class Event:
    id: str
    title: str
    starts_at: datetime
    location: str
    capacity: int
    created_at: datetime
    description: Optional[str] = None
    registrations: list[Registration] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return len(self.registrations) >= self.capacity

    def registration_for(self, user_id: str) -> Optional[Registration]:
        return next((r for r in self.registrations if r.user_id == user_id), None)

    def snapshot(self) -> "Event":
        """Copy safe to hand out of the registry lock."""
        return replace(self, registrations=list(self.registrations))

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, registered={len(self.registrations)}/{self.capacity})>"


@dataclass(frozen=True)
class EventStats:
    """Derived capacity figures; never stored."""

    total_registrations: int
    remaining_capacity: int
    capacity_used_percentage: int
    is_upcoming: bool

    @property
    def availability(self) -> str:
        if self.remaining_capacity <= 0:
            return "full"
        if self.capacity_used_percentage >= 90:
            return "almost_full"
        if self.capacity_used_percentage >= 70:
            return "filling"
        return "available"


@dataclass(frozen=True)
class RegistrySummary:
    """Dashboard totals across the whole registry."""

    total_events: int
    total_upcoming: int
    total_registrations: int
