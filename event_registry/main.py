"""
Event Registry API - Main Application Entry Point

An in-memory event registration service demonstrating:
- Capacity-safe registration with duplicate detection under a single lock
- Derived availability stats (remaining spots, percentage used)
- Structured logging with request correlation
- Prometheus metrics for registry operations
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_registry.core.config import get_settings
from event_registry.core.logging import setup_logging, get_logger
from event_registry.core.metrics import metrics_endpoint
from event_registry.api.router import api_router
from event_registry.api.middleware import RequestLoggingMiddleware
from event_registry.api.errors import register_error_handlers
from event_registry.services.notification_service import LoggingNotifier
from event_registry.services.registry import EventRegistry
from event_registry.services.seed import seed_demo_data

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    if settings.SEED_DEMO_DATA:
        seed_demo_data(app.state.registry, datetime.now(timezone.utc))

    yield

    logger.info("application_shutdown")


def create_app(
    registry: Optional[EventRegistry] = None,
    notifier: Optional[LoggingNotifier] = None,
) -> FastAPI:
    """Build the application around a registry. Each call gets fresh state."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="In-memory event registration API with capacity and duplicate checks",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    notifier = notifier or LoggingNotifier()
    app.state.notifier = notifier
    app.state.registry = registry or EventRegistry(notifier=notifier)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    def health_check():
        """Health check endpoint for Docker and load balancers."""
        summary = app.state.registry.get_summary()
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "events": summary.total_events,
        }

    @app.get("/metrics", tags=["Health"], include_in_schema=False)
    def metrics():
        return metrics_endpoint()

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()
