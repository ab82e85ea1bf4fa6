"""
Request-scoped access to the registry and notifier held on app.state.
"""

from fastapi import Request

from event_registry.services.registry import EventRegistry
from event_registry.services.notification_service import LoggingNotifier


def get_registry(request: Request) -> EventRegistry:
    return request.app.state.registry


def get_notifier(request: Request) -> LoggingNotifier:
    return request.app.state.notifier
