"""
Event endpoints: creation, listing, detail and capacity stats.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from event_registry.api.dependencies import get_registry
from event_registry.schemas.event import (
    EventCreate,
    EventResponse,
    EventStatsResponse,
    EventSummaryResponse,
)
from event_registry.services.registry import EventRegistry
from event_registry.core.exceptions import NotFoundError
from event_registry.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event_endpoint(
    event_data: EventCreate,
    registry: EventRegistry = Depends(get_registry),
):
    """Create a new event. Capacity must be 1-1000 and the date in the future."""
    event = registry.create_event(event_data)
    return EventResponse.model_validate(event)


@router.get("/", response_model=list[EventResponse])
def list_events_endpoint(registry: EventRegistry = Depends(get_registry)):
    """All events, past and upcoming, in creation order."""
    return [EventResponse.model_validate(e) for e in registry.list_events()]


@router.get("/upcoming", response_model=list[EventResponse])
def list_upcoming_events_endpoint(
    search: Optional[str] = Query(None, max_length=200),
    registry: EventRegistry = Depends(get_registry),
):
    """
    Events that have not started yet, earliest first.
    Events starting at the same time are ordered by location.
    `search` filters on title or location, case-insensitively.
    """
    events = registry.get_upcoming_events(search=search)
    logger.info("upcoming_events_listed", count=len(events), search=search)
    return [EventResponse.model_validate(e) for e in events]


@router.get("/summary", response_model=EventSummaryResponse)
def summary_endpoint(registry: EventRegistry = Depends(get_registry)):
    """Dashboard totals."""
    return EventSummaryResponse.model_validate(registry.get_summary())


@router.get("/{event_id}", response_model=EventResponse)
def get_event_endpoint(
    event_id: str,
    registry: EventRegistry = Depends(get_registry),
):
    event = registry.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found", context={"event_id": event_id})
    return EventResponse.model_validate(event)


@router.get("/{event_id}/stats", response_model=EventStatsResponse)
def get_event_stats_endpoint(
    event_id: str,
    registry: EventRegistry = Depends(get_registry),
):
    """Registrations, remaining spots and percentage of capacity used."""
    return EventStatsResponse.model_validate(registry.get_event_stats(event_id))
