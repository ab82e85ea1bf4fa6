from fastapi import APIRouter, Depends

from event_registry.api.dependencies import get_notifier
from event_registry.schemas.notification import NotificationResponse
from event_registry.services.notification_service import LoggingNotifier

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/", response_model=list[NotificationResponse])
def list_notifications_endpoint(notifier: LoggingNotifier = Depends(get_notifier)):
    """Recent success and failure notifications, newest first."""
    return [NotificationResponse.model_validate(n) for n in notifier.recent()]
