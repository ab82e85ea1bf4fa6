"""
No-op notifier for callers that do not surface notifications.
"""

from event_registry.services.interfaces.notifier import Notifier


class NullNotifier(Notifier):
    """Discards every notification."""

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        pass
