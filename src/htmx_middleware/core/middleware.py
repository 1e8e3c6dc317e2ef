"""Framework-agnostic core middleware for htmx header handling.

This module provides the logic wrapped by the framework adapters:

1. Build the per-request Htmx context from the request headers
2. Let the handler read and mutate the context
3. Flush the context and write the htmx response headers, overwriting any
   value the handler may have set directly

Header values that cannot be written into an HTTP response (line breaks or
characters outside latin-1) are dropped with a warning instead of failing
the response.

Examples:
    Using the middleware directly::

        from htmx_middleware.config import HtmxConfig
        from htmx_middleware.core.middleware import HtmxMiddleware

        middleware = HtmxMiddleware(HtmxConfig())

        htmx = middleware.begin(request_headers)
        response_headers = handle(request, htmx)
        middleware.finish(htmx, response_headers)
"""

from collections.abc import MutableMapping

from htmx_middleware.config import HtmxConfig
from htmx_middleware.core.context import Htmx
from htmx_middleware.models import TriggerType
from htmx_middleware.observability.logging import get_logger
from htmx_middleware.observability.metrics import (
    record_directive,
    record_request,
    record_skipped_header,
    record_triggers,
)
from htmx_middleware.utils.headers import RawHeaders, is_valid_header_value, set_header

logger = get_logger(__name__)


def request_kind(htmx: Htmx) -> str:
    """Classify a request for logging and metrics."""
    if not htmx.is_htmx:
        return "plain"
    if htmx.history_restore_request:
        return "history_restore"
    if htmx.boosted:
        return "boosted"
    return "htmx"


class HtmxMiddleware:
    """Framework-agnostic htmx middleware.

    Attributes:
        config: Configuration object
    """

    def __init__(self, config: HtmxConfig | None = None) -> None:
        """Initialize the middleware.

        Args:
            config: Configuration object (uses defaults if not provided)
        """
        self.config = config or HtmxConfig()

    def begin(self, headers: RawHeaders) -> Htmx:
        """Create the context for an incoming request.

        Args:
            headers: Raw request headers

        Returns:
            A fresh Htmx context owned by this request
        """
        htmx = Htmx.from_headers(headers)
        kind = request_kind(htmx)

        if self.config.metrics_enabled:
            record_request(kind)

        logger.debug(
            "htmx.request.parsed",
            kind=kind,
            target=htmx.target,
            trigger_id=htmx.trigger_id,
            trigger_name=htmx.trigger_name,
        )
        return htmx

    def finish(
        self,
        htmx: Htmx,
        response_headers: MutableMapping[str, str],
    ) -> dict[str, str]:
        """Flush the context into the response headers.

        Must be called exactly once per request, after the handler returns.

        Args:
            htmx: The request's context
            response_headers: Outgoing headers (a dict or Starlette
                MutableHeaders); modified in place

        Returns:
            The headers that were written
        """
        if not htmx.is_htmx and not self.config.emit_for_non_htmx:
            logger.debug("htmx.directives.suppressed", kind=request_kind(htmx))
            return {}

        written: dict[str, str] = {}
        for name, value in htmx.flush().items():
            if not is_valid_header_value(value):
                logger.warning(
                    "htmx.header.skipped",
                    header=name,
                    reason="invalid_value",
                )
                if self.config.metrics_enabled:
                    record_skipped_header(name)
                continue

            set_header(response_headers, name, value)
            written[name] = value

        if self.config.metrics_enabled:
            for name in written:
                record_directive(name)
            for trigger_type in TriggerType:
                if trigger_type.header_name in written:
                    record_triggers(
                        trigger_type.value,
                        len(htmx.triggers.entries(trigger_type)),
                    )

        if written:
            logger.debug("htmx.directives.flushed", headers=sorted(written))

        return written
