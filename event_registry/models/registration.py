"""
Registration model binding one user to one event.

Key design decisions:
- Holds a copy of the User record rather than a fresh entity
- At most one registration per (user_id, event_id); enforced by the registry
- Cancellation removes the record outright (no status column)
"""

from dataclasses import dataclass
from datetime import datetime

from event_registry.models.user import User


@dataclass(frozen=True)
class Registration:
    id: str
    user: User
    event_id: str
    registered_at: datetime

    @property
    def user_id(self) -> str:
        return self.user.id

    def __repr__(self) -> str:
        return f"<Registration(id={self.id}, user={self.user_id}, event={self.event_id})>"
