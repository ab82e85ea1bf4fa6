"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Event metrics
events_created = Counter(
    'events_created_total',
    'Total events created'
)

# Registration metrics
registration_attempts = Counter(
    'registration_attempts_total',
    'Total registration attempts',
    ['status']  # success, rejected
)

registrations_cancelled = Counter(
    'registrations_cancelled_total',
    'Total registrations cancelled'
)

registry_errors = Counter(
    'registry_errors_total',
    'Business-rule failures surfaced to clients',
    ['error']
)

operation_latency = Histogram(
    'registry_operation_latency_seconds',
    'Registry operation latency',
    ['operation'],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05]
)

# Store size
registry_events = Gauge(
    'registry_events',
    'Number of events held in the registry'
)

registry_users = Gauge(
    'registry_users',
    'Number of users held in the registry'
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
