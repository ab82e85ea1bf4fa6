"""
Translates registry errors into HTTP responses.

The registry raises plain business exceptions; this is the only place they
meet HTTP. Each failure is logged and counted, then surfaced to the user as a
destructive notification.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from event_registry.core.exceptions import RegistryError
from event_registry.core.logging import get_logger
from event_registry.core.metrics import registry_errors

logger = get_logger(__name__)


def _notification_title(request: Request) -> str:
    if request.method == "POST" and request.url.path.rstrip("/").endswith("/registrations"):
        return "Registration Failed"
    return "Error"


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    logger.warning(
        "registry_error",
        error=exc.error_code,
        detail=exc.message,
        status_code=exc.status_code,
        **exc.context,
    )
    registry_errors.labels(error=exc.error_code).inc()
    request.app.state.notifier.notify(_notification_title(request), exc.message, variant="destructive")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "detail": exc.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, registry_error_handler)
