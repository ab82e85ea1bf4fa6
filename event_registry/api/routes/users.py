from fastapi import APIRouter, Depends

from event_registry.api.dependencies import get_registry
from event_registry.schemas.user import UserResponse
from event_registry.services.registry import EventRegistry

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/", response_model=list[UserResponse])
def list_users_endpoint(registry: EventRegistry = Depends(get_registry)):
    """Every user created through registration."""
    return [UserResponse.model_validate(u) for u in registry.list_users()]
