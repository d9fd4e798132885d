"""Telemetry helpers and metrics."""

from .metrics import (
    CHART_ANALYSES,
    ERROR_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    UPLOAD_SIZE,
    observe_request,
    observe_upload,
    record_analysis,
)

__all__ = [
    "CHART_ANALYSES",
    "ERROR_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "UPLOAD_SIZE",
    "observe_request",
    "observe_upload",
    "record_analysis",
]
