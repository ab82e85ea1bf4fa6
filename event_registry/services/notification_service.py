"""
Notification service backed by structlog.

Every notification is logged and the most recent ones are kept in memory so
the presentation layer can poll them.
"""

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone

from event_registry.services.interfaces.notifier import Notifier
from event_registry.core.config import get_settings
from event_registry.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str
    created_at: datetime


class LoggingNotifier(Notifier):
    def __init__(self, history_size: int = None):
        if history_size is None:
            history_size = get_settings().NOTIFICATION_HISTORY_SIZE
        self._history: deque[Notification] = deque(maxlen=history_size)
        self._lock = threading.Lock()

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        notification = Notification(
            title=title,
            description=description,
            variant=variant,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._history.append(notification)

        log = logger.warning if variant == "destructive" else logger.info
        log("notification", title=title, description=description, variant=variant)

    def recent(self) -> list[Notification]:
        """Newest first."""
        with self._lock:
            return list(reversed(self._history))
