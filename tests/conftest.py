"""
Pytest fixtures for the registry, a controllable clock, and an HTTP client.

Every test gets a fresh registry and app, so no state leaks between tests.
"""

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from event_registry.main import create_app
from event_registry.schemas.event import EventCreate
from event_registry.schemas.user import RegistrationCreate
from event_registry.services.notification_service import LoggingNotifier
from event_registry.services.registry import EventRegistry


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def notifier() -> LoggingNotifier:
    return LoggingNotifier(history_size=20)


@pytest.fixture
def registry(notifier: LoggingNotifier, clock: FrozenClock) -> EventRegistry:
    return EventRegistry(notifier=notifier, clock=clock)


@pytest.fixture
def make_event(registry: EventRegistry, clock: FrozenClock):
    """Create an event `days` after the frozen now."""

    def _make(title="Test Concert", location="Test Venue", capacity=100, days=30, **kwargs):
        return registry.create_event(
            EventCreate(
                title=title,
                starts_at=clock.now + timedelta(days=days),
                location=location,
                capacity=capacity,
                **kwargs,
            )
        )

    return _make


@pytest.fixture
def attendee():
    def _attendee(name="Ada Lovelace", email="ada@example.com"):
        return RegistrationCreate(name=name, email=email)

    return _attendee


@pytest_asyncio.fixture(scope="function")
async def client(registry: EventRegistry, notifier: LoggingNotifier) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app built around the test registry."""
    app = create_app(registry=registry, notifier=notifier)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def future_date(clock: FrozenClock) -> str:
    return (clock.now + timedelta(days=30)).isoformat()
