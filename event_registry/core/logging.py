"""
Structured logging configuration using structlog.

Every line carries the service name and environment. Request IDs bound by
the middleware flow into every registry log line, so a rejected registration
can be traced from `request_completed` back to `registration_failed_*`.

Registry event names:
  event_created, registration_created, registration_cancelled,
  registration_failed_past_event, registration_failed_no_capacity,
  registration_failed_duplicate, registry_error, notification
"""

import logging
import sys
import structlog
from structlog.typing import EventDict, Processor, WrappedLogger
from event_registry.core.config import get_settings


def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp service identity without overriding a value bound by the caller."""
    settings = get_settings()
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def resolve_renderer(log_format: str, environment: str) -> Processor:
    """
    LOG_FORMAT "json" or "console" wins; "auto" renders JSON in production
    and a coloured console everywhere else.
    """
    fmt = log_format.lower()
    if fmt == "auto":
        fmt = "json" if environment == "production" else "console"
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=True)
    raise ValueError(f"Unknown LOG_FORMAT: {log_format!r}")


def bind_request_context(request_id: str, method: str, path: str) -> None:
    """Reset per-request context; registry log calls pick it up implicitly."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)


def setup_logging() -> None:
    settings = get_settings()
    renderer = resolve_renderer(settings.LOG_FORMAT, settings.ENVIRONMENT)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if isinstance(renderer, structlog.processors.JSONRenderer):
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ]
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # one structlog handler, however many times the app starts in-process
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
