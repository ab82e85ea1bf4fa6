"""
Registration endpoints. Capacity and duplicate checks happen inside the
registry under its lock; this layer only maps requests onto it.
"""

from fastapi import APIRouter, Depends, status

from event_registry.api.dependencies import get_registry
from event_registry.schemas.registration import RegistrationResponse, RegistrationCancelResponse
from event_registry.schemas.user import RegistrationCreate
from event_registry.services.registry import EventRegistry

router = APIRouter(prefix="/events/{event_id}/registrations", tags=["Registrations"])


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
def register_endpoint(
    event_id: str,
    user_data: RegistrationCreate,
    registry: EventRegistry = Depends(get_registry),
):
    """
    Register an attendee by name and email.

    An email seen before reuses the existing user record. Fails with 409 when
    the event is full or the user is already registered, and 400 when the
    event has already started.
    """
    registration = registry.register_user_for_event(event_id, user_data)
    return RegistrationResponse.model_validate(registration)


@router.get("", response_model=list[RegistrationResponse])
def list_registrations_endpoint(
    event_id: str,
    registry: EventRegistry = Depends(get_registry),
):
    """Registered attendees in registration order."""
    return [RegistrationResponse.model_validate(r) for r in registry.get_registrations(event_id)]


@router.delete("/{user_id}", response_model=RegistrationCancelResponse)
def cancel_registration_endpoint(
    event_id: str,
    user_id: str,
    registry: EventRegistry = Depends(get_registry),
):
    """Cancel a registration and free the spot. Cancelling twice returns 404."""
    registry.cancel_registration(event_id, user_id)
    return RegistrationCancelResponse(
        message="Registration cancelled successfully",
        event_id=event_id,
        user_id=user_id,
    )
