"""Observability utilities for htmx middleware.

This package provides monitoring and debugging capabilities:
- Prometheus metrics for request kinds, triggers and written headers
- Structured logging with contextual information
"""

from htmx_middleware.observability.logging import configure_logging, get_logger
from htmx_middleware.observability.metrics import (
    record_directive,
    record_request,
    record_skipped_header,
    record_triggers,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "record_request",
    "record_triggers",
    "record_directive",
    "record_skipped_header",
]
