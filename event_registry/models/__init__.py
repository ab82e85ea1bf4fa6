from event_registry.models.user import User
from event_registry.models.registration import Registration
from event_registry.models.event import Event, EventStats, RegistrySummary

__all__ = ["User", "Registration", "Event", "EventStats", "RegistrySummary"]
