"""
Tests for the EventRegistry business rules, driven directly without HTTP.
"""

import threading
from datetime import datetime, timedelta

import pytest

from event_registry.core.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    NotFoundError,
    NotRegisteredError,
    PastEventError,
    ValidationError,
)
from event_registry.schemas.event import EventCreate
from event_registry.services.notification_service import LoggingNotifier
from event_registry.services.registry import capacity_used_percentage


# ----------------------------------------------------------------------
# create_event
# ----------------------------------------------------------------------

def test_create_event_starts_empty(make_event, registry, clock):
    event = make_event(capacity=50, description="A test event")
    assert event.registrations == []
    assert event.capacity == 50
    assert event.description == "A test event"
    assert event.created_at == clock.now
    assert registry.get_event(event.id).title == "Test Concert"


@pytest.mark.parametrize("capacity", [0, -1, 1001])
def test_create_event_rejects_capacity_out_of_range(make_event, registry, capacity):
    with pytest.raises(ValidationError):
        make_event(capacity=capacity)
    assert registry.list_events() == []


@pytest.mark.parametrize("capacity", [1, 1000])
def test_create_event_accepts_capacity_bounds(make_event, capacity):
    assert make_event(capacity=capacity).capacity == capacity


def test_create_event_rejects_past_date(make_event, registry):
    with pytest.raises(ValidationError, match="future"):
        make_event(days=-1)
    assert registry.list_events() == []


def test_create_event_rejects_current_instant(registry, clock):
    with pytest.raises(ValidationError):
        registry.create_event(
            EventCreate(title="Now", starts_at=clock.now, location="Here", capacity=10)
        )


def test_create_event_treats_naive_datetime_as_utc(registry, clock):
    naive = (clock.now + timedelta(hours=1)).replace(tzinfo=None)
    event = registry.create_event(
        EventCreate(title="Naive", starts_at=naive, location="Here", capacity=10)
    )
    assert event.starts_at.tzinfo is not None
    assert event.starts_at == clock.now + timedelta(hours=1)


def test_event_ids_are_unique(make_event):
    ids = {make_event(title=f"Event {i}").id for i in range(20)}
    assert len(ids) == 20


def test_get_event_unknown_returns_none(registry):
    assert registry.get_event("missing") is None


# ----------------------------------------------------------------------
# register_user_for_event
# ----------------------------------------------------------------------

def test_register_creates_user_and_registration(make_event, registry, attendee, clock):
    event = make_event()
    registration = registry.register_user_for_event(event.id, attendee())

    assert registration.event_id == event.id
    assert registration.user.email == "ada@example.com"
    assert registration.user_id == registration.user.id
    assert registration.registered_at == clock.now
    assert registry.list_users() == [registration.user]
    assert registry.get_registrations(event.id) == [registration]


def test_register_unknown_event(registry, attendee):
    with pytest.raises(NotFoundError):
        registry.register_user_for_event("missing", attendee())


def test_register_past_event(make_event, registry, attendee, clock):
    event = make_event(days=1)
    clock.advance(days=2)

    with pytest.raises(PastEventError):
        registry.register_user_for_event(event.id, attendee())
    assert registry.list_users() == []


def test_capacity_is_never_exceeded(make_event, registry, attendee):
    event = make_event(capacity=3)
    for i in range(3):
        registry.register_user_for_event(event.id, attendee(name=f"User {i}", email=f"u{i}@example.com"))

    with pytest.raises(CapacityExceededError):
        registry.register_user_for_event(event.id, attendee(name="Late", email="late@example.com"))

    assert len(registry.get_registrations(event.id)) == 3
    # the rejected attendee was never stored
    assert "late@example.com" not in {u.email for u in registry.list_users()}


def test_duplicate_registration_same_event(make_event, registry, attendee):
    event = make_event()
    registry.register_user_for_event(event.id, attendee())

    with pytest.raises(DuplicateRegistrationError):
        registry.register_user_for_event(event.id, attendee(name="Someone Else"))

    assert len(registry.get_registrations(event.id)) == 1


def test_same_email_reuses_user_across_events(make_event, registry, attendee):
    first = make_event(title="First")
    second = make_event(title="Second")

    r1 = registry.register_user_for_event(first.id, attendee())
    r2 = registry.register_user_for_event(second.id, attendee())

    assert r1.user_id == r2.user_id
    assert len(registry.list_users()) == 1


def test_email_match_is_exact(make_event, registry, attendee):
    event = make_event()
    r1 = registry.register_user_for_event(event.id, attendee(email="ada@example.com"))
    r2 = registry.register_user_for_event(event.id, attendee(email="Ada@example.com"))
    assert r1.user_id != r2.user_id


def test_full_event_checked_before_duplicate(make_event, registry, attendee):
    event = make_event(capacity=1)
    registry.register_user_for_event(event.id, attendee())

    with pytest.raises(CapacityExceededError):
        registry.register_user_for_event(event.id, attendee())


def test_returned_event_is_a_snapshot(make_event, registry, attendee):
    event = make_event()
    registry.register_user_for_event(event.id, attendee())

    assert event.registrations == []
    assert len(registry.get_event(event.id).registrations) == 1


def test_concurrent_registrations_respect_capacity(make_event, registry, attendee):
    event = make_event(capacity=10)
    errors = []

    def worker(i):
        try:
            registry.register_user_for_event(event.id, attendee(name=f"U{i}", email=f"u{i}@example.com"))
        except CapacityExceededError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry.get_registrations(event.id)) == 10
    assert len(errors) == 40


# ----------------------------------------------------------------------
# cancel_registration
# ----------------------------------------------------------------------

def test_cancel_updates_stats(make_event, registry, attendee):
    event = make_event(capacity=10)
    registration = registry.register_user_for_event(event.id, attendee())
    registry.register_user_for_event(event.id, attendee(name="Bob", email="bob@example.com"))
    before = registry.get_event_stats(event.id)

    registry.cancel_registration(event.id, registration.user_id)

    after = registry.get_event_stats(event.id)
    assert after.total_registrations == before.total_registrations - 1
    assert after.remaining_capacity == before.remaining_capacity + 1
    assert [r.user.email for r in registry.get_registrations(event.id)] == ["bob@example.com"]


def test_cancel_twice_fails(make_event, registry, attendee):
    event = make_event()
    registration = registry.register_user_for_event(event.id, attendee())
    registry.cancel_registration(event.id, registration.user_id)

    with pytest.raises(NotRegisteredError):
        registry.cancel_registration(event.id, registration.user_id)


def test_cancel_unknown_event(registry):
    with pytest.raises(NotFoundError):
        registry.cancel_registration("missing", "user")


def test_cancel_keeps_user_record(make_event, registry, attendee):
    event = make_event()
    registration = registry.register_user_for_event(event.id, attendee())
    registry.cancel_registration(event.id, registration.user_id)
    assert registry.list_users() == [registration.user]


def test_capacity_scenario(make_event, registry, attendee):
    event = make_event(capacity=1)
    a = registry.register_user_for_event(event.id, attendee(name="A", email="a@example.com"))

    with pytest.raises(CapacityExceededError):
        registry.register_user_for_event(event.id, attendee(name="B", email="b@example.com"))

    registry.cancel_registration(event.id, a.user_id)
    b = registry.register_user_for_event(event.id, attendee(name="B", email="b@example.com"))

    assert [r.id for r in registry.get_registrations(event.id)] == [b.id]


# ----------------------------------------------------------------------
# queries
# ----------------------------------------------------------------------

def test_upcoming_sorted_by_date_then_location(make_event, registry, clock):
    later = make_event(title="Later", location="A Hall", days=10)
    tie_b = make_event(title="Tie B", location="Berlin", days=5)
    tie_a = make_event(title="Tie A", location="Amsterdam", days=5)
    soon = make_event(title="Soon", location="Zurich", days=1)

    upcoming = registry.get_upcoming_events()
    assert [e.id for e in upcoming] == [soon.id, tie_a.id, tie_b.id, later.id]


def test_upcoming_excludes_started_events(make_event, registry, clock):
    soon = make_event(title="Soon", days=1)
    later = make_event(title="Later", days=3)
    clock.advance(days=1)

    # an event starting exactly now is no longer upcoming
    assert [e.id for e in registry.get_upcoming_events()] == [later.id]
    assert len(registry.list_events()) == 2
    assert registry.get_event(soon.id) is not None


def test_upcoming_search_matches_title_or_location(make_event, registry):
    make_event(title="PyCon", location="Pittsburgh")
    make_event(title="Jazz Night", location="New Orleans")
    make_event(title="Data Summit", location="Python House")

    titles = [e.title for e in registry.get_upcoming_events(search="PYTH")]
    assert sorted(titles) == ["Data Summit"]
    titles = [e.title for e in registry.get_upcoming_events(search="py")]
    assert sorted(titles) == ["Data Summit", "PyCon"]
    assert len(registry.get_upcoming_events(search="")) == 3


def test_event_stats(make_event, registry, attendee):
    event = make_event(capacity=3)
    registry.register_user_for_event(event.id, attendee())

    stats = registry.get_event_stats(event.id)
    assert stats.total_registrations == 1
    assert stats.remaining_capacity == 2
    assert stats.capacity_used_percentage == 33
    assert stats.is_upcoming is True
    assert stats.availability == "available"


def test_event_stats_unknown_event(registry):
    with pytest.raises(NotFoundError):
        registry.get_event_stats("missing")


def test_event_stats_full_event(make_event, registry, attendee):
    event = make_event(capacity=1)
    registry.register_user_for_event(event.id, attendee())

    stats = registry.get_event_stats(event.id)
    assert stats.remaining_capacity == 0
    assert stats.capacity_used_percentage == 100
    assert stats.availability == "full"


def test_event_stats_past_event(make_event, registry, clock):
    event = make_event(days=1)
    clock.advance(days=2)
    assert registry.get_event_stats(event.id).is_upcoming is False


@pytest.mark.parametrize(
    "total, capacity, expected",
    [
        (0, 10, 0),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds up
        (1, 200, 1),  # 0.5 rounds up
        (7, 10, 70),
        (10, 10, 100),
    ],
)
def test_capacity_used_percentage(total, capacity, expected):
    assert capacity_used_percentage(total, capacity) == expected


@pytest.mark.parametrize(
    "registered, capacity, level",
    [(6, 10, "available"), (7, 10, "filling"), (9, 10, "almost_full"), (10, 10, "full")],
)
def test_availability_levels(make_event, registry, attendee, registered, capacity, level):
    event = make_event(capacity=capacity)
    for i in range(registered):
        registry.register_user_for_event(event.id, attendee(name=f"U{i}", email=f"u{i}@example.com"))
    assert registry.get_event_stats(event.id).availability == level


def test_summary(make_event, registry, attendee, clock):
    first = make_event(title="First", days=1)
    second = make_event(title="Second", days=5)
    registry.register_user_for_event(first.id, attendee())
    registry.register_user_for_event(second.id, attendee())
    registry.register_user_for_event(second.id, attendee(name="Bob", email="bob@example.com"))
    clock.advance(days=2)

    summary = registry.get_summary()
    assert summary.total_events == 2
    assert summary.total_upcoming == 1
    assert summary.total_registrations == 3


# ----------------------------------------------------------------------
# notifications
# ----------------------------------------------------------------------

def test_operations_emit_notifications(make_event, registry, notifier, attendee):
    event = make_event(title="Launch Party")
    registration = registry.register_user_for_event(event.id, attendee())
    registry.cancel_registration(event.id, registration.user_id)

    recent = notifier.recent()
    assert [n.title for n in recent] == [
        "Registration Cancelled",
        "Registration Successful",
        "Event Created",
    ]
    assert recent[0].variant == "destructive"
    assert recent[1].description == "Ada Lovelace has been registered for Launch Party."
    assert recent[2].description == "Launch Party has been successfully created."


def test_failed_operation_does_not_notify(registry, notifier, clock):
    with pytest.raises(ValidationError):
        registry.create_event(
            EventCreate(title="Bad", starts_at=clock.now + timedelta(days=1), location="X", capacity=0)
        )
    assert notifier.recent() == []


def test_notifier_history_is_bounded():
    notifier = LoggingNotifier(history_size=2)
    for i in range(5):
        notifier.notify(f"Title {i}", "body")

    recent = notifier.recent()
    assert [n.title for n in recent] == ["Title 4", "Title 3"]
    assert all(isinstance(n.created_at, datetime) for n in recent)
