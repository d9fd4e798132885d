"""Prometheus metrics definitions and helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    ("method", "route", "status"),
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ("method", "route"),
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

ERROR_COUNTER = Counter(
    "app_internal_errors_total",
    "Number of requests ending in internal server error responses",
    ("method", "route"),
)

CHART_ANALYSES = Counter(
    "chart_analyses_total",
    "Chart analysis requests by prompt kind and outcome",
    ("kind", "outcome"),
)

UPLOAD_SIZE = Histogram(
    "chart_upload_bytes",
    "Size of multipart bodies posted to the chart analysis endpoint",
    buckets=(10_000, 100_000, 500_000, 1_000_000, 5_000_000, 10_000_000, 20_000_000),
)


def observe_request(
    method: str,
    route: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record metrics for a completed HTTP request."""

    safe_route = route or "unknown"
    safe_method = method or "UNKNOWN"
    observed_duration = duration_seconds if duration_seconds >= 0 else 0

    REQUEST_COUNT.labels(
        method=safe_method,
        route=safe_route,
        status=str(status_code),
    ).inc()
    REQUEST_LATENCY.labels(method=safe_method, route=safe_route).observe(observed_duration)

    if status_code >= 500:
        ERROR_COUNTER.labels(method=safe_method, route=safe_route).inc()


def observe_upload(size_bytes: int) -> None:
    UPLOAD_SIZE.observe(max(0, size_bytes))


def record_analysis(kind: str, outcome: str) -> None:
    """Count a chart analysis; `kind` is initial/follow_up, `outcome` ok/config_error/failed."""

    CHART_ANALYSES.labels(kind=kind, outcome=outcome).inc()
