"""
Notification collaborator interface.
The registry reports outcomes through it without knowing how they are shown.
"""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """
    Interface for user-facing notifications.

    Implementations:
    - LoggingNotifier: structlog output plus a bounded in-memory history
    - NullNotifier: discards everything
    """

    @abstractmethod
    def notify(self, title: str, description: str, variant: str = "default") -> None:
        """
        Emit a notification.

        Args:
            title: Short heading, e.g. "Event Created"
            description: Human-readable message
            variant: "default" for success, "destructive" for failures
        """
        pass
