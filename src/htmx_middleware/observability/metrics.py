"""Prometheus metrics for htmx middleware.

Metrics include:

- Request counter by kind (htmx, boosted, history_restore, plain)
- Trigger counter by lifecycle stage
- Directive counter by response header
- Counter of response headers skipped because their value was not writable

Examples:
    Recording a boosted request::

        from htmx_middleware.observability.metrics import record_request

        record_request(kind="boosted")
"""

from prometheus_client import Counter

# Labels: kind (htmx, boosted, history_restore, plain)
requests_total = Counter(
    "htmx_requests_total",
    "Total number of requests seen by the htmx middleware",
    ["kind"],
)

# Labels: stage (standard, after_swap, after_settle)
triggers_total = Counter(
    "htmx_triggers_total",
    "Total number of trigger events sent to clients",
    ["stage"],
)

# Labels: header (hx-redirect, hx-trigger, ...)
directives_total = Counter(
    "htmx_directives_total",
    "Total number of htmx response headers written",
    ["header"],
)

headers_skipped_total = Counter(
    "htmx_headers_skipped_total",
    "Total number of htmx response headers dropped because of invalid values",
    ["header"],
)


def record_request(kind: str) -> None:
    """Record a request by kind.

    Examples:
        >>> record_request("htmx")
        >>> record_request("plain")
    """
    requests_total.labels(kind=kind).inc()


def record_triggers(stage: str, count: int) -> None:
    """Record trigger events sent for one lifecycle stage."""
    if count:
        triggers_total.labels(stage=stage).inc(count)


def record_directive(header: str) -> None:
    """Record an htmx response header written to a response."""
    directives_total.labels(header=header).inc()


def record_skipped_header(header: str) -> None:
    """Record an htmx response header dropped at flush time."""
    headers_skipped_total.labels(header=header).inc()
