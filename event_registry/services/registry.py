"""
In-memory event registry with capacity-safe registration.

CONCURRENCY STRATEGY: One Owning Lock
=====================================

Problem:
  FastAPI runs sync endpoints on a worker thread pool. Two requests can try
  to take the last spot on an event at the same time. Both see
  len(registrations) == capacity - 1, both append, and the event is
  overbooked. The duplicate check has the same race.

Solution:
  The registry owns its collections and every operation, reads included,
  runs under a single re-entrant lock. Check-then-append is therefore
  atomic, and readers never observe a half-applied mutation.

  Reads hand out snapshots (Event.snapshot()) so callers can serialize them
  after the lock is released without racing later writers.

Failure model:
  Every check runs before any collection is modified. A failed operation
  raises a RegistryError subclass and leaves events and users untouched.
"""

import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Optional

from event_registry.models import Event, EventStats, Registration, RegistrySummary, User
from event_registry.schemas.event import EventCreate
from event_registry.schemas.user import RegistrationCreate
from event_registry.services.interfaces import Notifier, NullNotifier
from event_registry.core.config import get_settings
from event_registry.core.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    NotFoundError,
    NotRegisteredError,
    PastEventError,
    RegistryError,
    ValidationError,
)
from event_registry.core.logging import get_logger
from event_registry.core.metrics import (
    events_created,
    operation_latency,
    registration_attempts,
    registrations_cancelled,
    registry_events,
    registry_users,
)

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def capacity_used_percentage(total: int, capacity: int) -> int:
    """round(total / capacity * 100), halves rounded up."""
    ratio = Decimal(total) * 100 / Decimal(capacity)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class EventRegistry:
    """Owns the event and user collections and every rule applied to them."""

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = _utc_now,
        min_capacity: Optional[int] = None,
        max_capacity: Optional[int] = None,
    ):
        settings = get_settings()
        self._notifier = notifier or NullNotifier()
        self._clock = clock
        self._min_capacity = settings.MIN_CAPACITY if min_capacity is None else min_capacity
        self._max_capacity = settings.MAX_CAPACITY if max_capacity is None else max_capacity
        self._events: list[Event] = []
        self._users: list[User] = []
        self._lock = threading.RLock()

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def _find_event(self, event_id: str) -> Optional[Event]:
        return next((e for e in self._events if e.id == event_id), None)

    def _require_event(self, event_id: str) -> Event:
        event = self._find_event(event_id)
        if event is None:
            raise NotFoundError("Event not found", context={"event_id": event_id})
        return event

    def _update_gauges(self) -> None:
        registry_events.set(len(self._events))
        registry_users.set(len(self._users))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_event(self, event_data: EventCreate) -> Event:
        """Validate and store a new event with no registrations."""
        with operation_latency.labels("create_event").time(), self._lock:
            if not self._min_capacity <= event_data.capacity <= self._max_capacity:
                raise ValidationError(
                    f"Event capacity must be between {self._min_capacity} and {self._max_capacity}",
                    context={"capacity": event_data.capacity},
                )

            now = self._now()
            starts_at = as_utc(event_data.starts_at)
            if starts_at <= now:
                raise ValidationError(
                    "Event date must be in the future",
                    context={"starts_at": starts_at.isoformat()},
                )

            event = Event(
                id=new_id(),
                title=event_data.title,
                starts_at=starts_at,
                location=event_data.location,
                capacity=event_data.capacity,
                description=event_data.description,
                registrations=[],
                created_at=now,
            )
            self._events.append(event)
            self._update_gauges()
            events_created.inc()

            logger.info("event_created", event_id=event.id, title=event.title, capacity=event.capacity)
            self._notifier.notify(
                "Event Created",
                f"{event.title} has been successfully created.",
            )
            return event.snapshot()

    def register_user_for_event(self, event_id: str, user_data: RegistrationCreate) -> Registration:
        """
        Register an attendee, creating the user record on first sight of
        their email. Check order: existence, start date, capacity, duplicate.
        """
        with operation_latency.labels("register").time(), self._lock:
            try:
                registration, event, created_user = self._register(event_id, user_data)
            except RegistryError:
                registration_attempts.labels(status="rejected").inc()
                raise

            if created_user:
                self._users.append(registration.user)
            event.registrations.append(registration)
            self._update_gauges()
            registration_attempts.labels(status="success").inc()

            logger.info(
                "registration_created",
                registration_id=registration.id,
                user_id=registration.user_id,
                event_id=event.id,
                registered=len(event.registrations),
                capacity=event.capacity,
            )
            self._notifier.notify(
                "Registration Successful",
                f"{user_data.name} has been registered for {event.title}.",
            )
            return registration

    def _register(self, event_id: str, user_data: RegistrationCreate) -> tuple[Registration, Event, bool]:
        """Run every check and build the records; mutates nothing."""
        event = self._require_event(event_id)

        now = self._now()
        if event.starts_at < now:
            logger.warning("registration_failed_past_event", event_id=event_id)
            raise PastEventError("Cannot register for past events", context={"event_id": event_id})

        if len(event.registrations) >= event.capacity:
            logger.warning(
                "registration_failed_no_capacity",
                event_id=event_id,
                capacity=event.capacity,
            )
            raise CapacityExceededError("Event is at full capacity", context={"event_id": event_id})

        user = next((u for u in self._users if u.email == user_data.email), None)
        created_user = user is None
        if created_user:
            user = User(id=new_id(), name=user_data.name, email=user_data.email)

        if event.registration_for(user.id) is not None:
            logger.warning("registration_failed_duplicate", event_id=event_id, user_id=user.id)
            raise DuplicateRegistrationError(
                "User is already registered for this event",
                context={"event_id": event_id, "user_id": user.id},
            )

        registration = Registration(
            id=new_id(),
            user=user,
            event_id=event.id,
            registered_at=now,
        )
        return registration, event, created_user

    def cancel_registration(self, event_id: str, user_id: str) -> None:
        """Remove the user's registration. A second cancel fails."""
        with operation_latency.labels("cancel").time(), self._lock:
            event = self._require_event(event_id)

            if event.registration_for(user_id) is None:
                raise NotRegisteredError(
                    "User is not registered for this event",
                    context={"event_id": event_id, "user_id": user_id},
                )

            event.registrations = [r for r in event.registrations if r.user_id != user_id]
            registrations_cancelled.inc()

            logger.info(
                "registration_cancelled",
                event_id=event_id,
                user_id=user_id,
                registered=len(event.registrations),
            )
            self._notifier.notify(
                "Registration Cancelled",
                f"Registration for {event.title} has been cancelled.",
                variant="destructive",
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._lock:
            event = self._find_event(event_id)
            return event.snapshot() if event else None

    def list_events(self) -> list[Event]:
        with self._lock:
            return [e.snapshot() for e in self._events]

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def get_registrations(self, event_id: str) -> list[Registration]:
        with self._lock:
            return list(self._require_event(event_id).registrations)

    def get_upcoming_events(self, search: Optional[str] = None) -> list[Event]:
        """
        Events starting strictly after now, earliest first; events starting
        at the same instant are ordered by location. An optional search term
        keeps events whose title or location contains it, ignoring case.
        """
        with operation_latency.labels("upcoming").time(), self._lock:
            now = self._now()
            upcoming = sorted(
                (e for e in self._events if e.starts_at > now),
                key=lambda e: (e.starts_at, e.location),
            )
            if search:
                term = search.lower()
                upcoming = [
                    e for e in upcoming
                    if term in e.title.lower() or term in e.location.lower()
                ]
            return [e.snapshot() for e in upcoming]

    def get_event_stats(self, event_id: str) -> EventStats:
        with self._lock:
            event = self._require_event(event_id)
            total = len(event.registrations)
            return EventStats(
                total_registrations=total,
                remaining_capacity=event.capacity - total,
                capacity_used_percentage=capacity_used_percentage(total, event.capacity),
                is_upcoming=event.starts_at > self._now(),
            )

    def get_summary(self) -> RegistrySummary:
        with self._lock:
            now = self._now()
            return RegistrySummary(
                total_events=len(self._events),
                total_upcoming=sum(1 for e in self._events if e.starts_at > now),
                total_registrations=sum(len(e.registrations) for e in self._events),
            )
