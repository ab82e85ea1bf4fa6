"""
Registry error taxonomy.

These are business failures, not HTTP responses. Each class carries the
status code the API layer maps it to; the registry itself never looks at it.
Every error is raised before any collection is touched, so a failed
operation leaves the registry unmodified.
"""

from typing import Optional


class RegistryError(Exception):
    """Base class for all registry business-rule failures."""

    status_code: int = 400

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    @property
    def error_code(self) -> str:
        return self.__class__.__name__

    def __str__(self) -> str:
        return self.message


class ValidationError(RegistryError):
    """Input outside the accepted range (capacity bounds, past start date)."""

    status_code = 400


class NotFoundError(RegistryError):
    """No event matches the given id."""

    status_code = 404


class PastEventError(RegistryError):
    """Registration attempted on an event that has already started."""

    status_code = 400


class CapacityExceededError(RegistryError):
    status_code = 409


class DuplicateRegistrationError(RegistryError):
    status_code = 409


class NotRegisteredError(RegistryError):
    """Cancellation for a user that holds no registration on the event."""

    status_code = 404
