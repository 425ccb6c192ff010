"""
Prometheus metrics for the job lifecycle service.
"""

import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()


def get_registry():
    """Get the current registry."""
    return registry


def _get_metric(metric_class, *args, **kwargs):
    return metric_class(*args, **kwargs, registry=get_registry())


# Lifecycle metrics
JOBS_CREATED = _get_metric(
    Counter,
    "jobs_created_total",
    "Total number of jobs created",
    ["category"],
)

JOB_TRANSITIONS = _get_metric(
    Counter,
    "job_status_transitions_total",
    "Total number of job status transitions",
    ["status"],
)

INVOICES_GENERATED = _get_metric(
    Counter,
    "invoices_generated_total",
    "Total number of invoices generated",
)

INVOICES_OVERDUE = _get_metric(
    Counter,
    "invoices_marked_overdue_total",
    "Total number of invoices marked overdue",
)

CASH_PAYMENT_EVENTS = _get_metric(
    Counter,
    "cash_payment_events_total",
    "Total number of cash payment events",
    ["event"],
)

ONLINE_PAYMENTS = _get_metric(
    Counter,
    "online_payments_total",
    "Total number of verified online payments",
    ["status"],
)

PAYOUT_EVENTS = _get_metric(
    Counter,
    "payout_events_total",
    "Total number of payout events",
    ["status"],
)

# Concurrency metrics
OPTIMISTIC_LOCK_CONFLICTS = _get_metric(
    Counter,
    "optimistic_lock_conflicts_total",
    "Total number of version conflicts detected on save",
    ["operation"],
)

# Notification metrics
NOTIFICATIONS_SENT = _get_metric(
    Counter,
    "notifications_sent_total",
    "Total number of notifications delivered",
    ["type"],
)

NOTIFICATION_FAILURES = _get_metric(
    Counter,
    "notification_failures_total",
    "Total number of notifications that could not be delivered",
    ["type"],
)

# API metrics
API_REQUESTS = _get_metric(
    Counter,
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)

API_REQUEST_DURATION = _get_metric(
    Histogram,
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0],
)

# Error metrics
ERRORS_TOTAL = _get_metric(
    Counter,
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
)


def record_job_creation(category: str):
    """Record job creation metric."""
    JOBS_CREATED.labels(category=category).inc()


def record_job_transition(status: str):
    """Record job status transition metric."""
    JOB_TRANSITIONS.labels(status=status).inc()


def record_invoice_generated():
    INVOICES_GENERATED.inc()


def record_invoices_overdue(count: int):
    if count:
        INVOICES_OVERDUE.inc(count)


def record_cash_payment_event(event: str):
    """Record cash payment event metric (received, confirmed, disputed, verified)."""
    CASH_PAYMENT_EVENTS.labels(event=event).inc()


def record_online_payment(status: str):
    ONLINE_PAYMENTS.labels(status=status).inc()


def record_payout_event(status: str):
    PAYOUT_EVENTS.labels(status=status).inc()


def record_optimistic_lock_conflict(operation: str):
    """Record a rejected version-checked write."""
    OPTIMISTIC_LOCK_CONFLICTS.labels(operation=operation).inc()


def record_notification(notification_type: str, success: bool):
    if success:
        NOTIFICATIONS_SENT.labels(type=notification_type).inc()
    else:
        NOTIFICATION_FAILURES.labels(type=notification_type).inc()


def record_api_request(method: str, endpoint: str, status_code: int, started_at: float):
    """Record API request count and duration."""
    API_REQUESTS.labels(
        method=method, endpoint=endpoint, status_code=str(status_code)
    ).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(
        time.time() - started_at
    )


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics() -> bytes:
    """Get metrics in Prometheus format."""
    return generate_latest(get_registry())


def get_metrics_content_type() -> str:
    """Get content type for metrics endpoint."""
    return CONTENT_TYPE_LATEST
