"""
Demo data for local development.
Scheduled relative to the current time so the events are always upcoming.
"""

from datetime import timedelta

from event_registry.schemas.event import EventCreate
from event_registry.services.registry import EventRegistry
from event_registry.core.logging import get_logger

logger = get_logger(__name__)


def demo_events(now) -> list[EventCreate]:
    return [
        EventCreate(
            title="Web Development Conference",
            starts_at=(now + timedelta(days=30)).replace(hour=9, minute=0, second=0, microsecond=0),
            location="San Francisco Convention Center",
            capacity=500,
            description="Join us for the biggest web development conference of the year!",
        ),
        EventCreate(
            title="AI & Machine Learning Summit",
            starts_at=(now + timedelta(days=60)).replace(hour=8, minute=30, second=0, microsecond=0),
            location="Tech Hub, New York",
            capacity=300,
            description="Explore the latest in AI and machine learning technologies.",
        ),
    ]


def seed_demo_data(registry: EventRegistry, now) -> int:
    """Create the demo events. Returns how many were created."""
    events = demo_events(now)
    for event_data in events:
        registry.create_event(event_data)
    logger.info("demo_data_seeded", events=len(events))
    return len(events)
