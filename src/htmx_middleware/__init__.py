"""
htmx support for Python web applications.

This package parses the request headers sent by the htmx client library and
lets handlers queue htmx response headers (redirects, swaps, history updates
and trigger events), which the middleware writes into the response.
"""

from htmx_middleware.adapters.asgi import HtmxASGIMiddleware, get_htmx
from htmx_middleware.config import HtmxConfig
from htmx_middleware.core.context import Htmx
from htmx_middleware.core.middleware import HtmxMiddleware
from htmx_middleware.exceptions import (
    HtmxError,
    InvalidTriggerError,
    PayloadSerializationError,
)
from htmx_middleware.models import (
    HxLocation,
    RequestSnapshot,
    SwapType,
    TriggerPayload,
    TriggerType,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Htmx",
    "HtmxASGIMiddleware",
    "HtmxConfig",
    "HtmxError",
    "HtmxMiddleware",
    "HxLocation",
    "InvalidTriggerError",
    "PayloadSerializationError",
    "RequestSnapshot",
    "SwapType",
    "TriggerPayload",
    "TriggerType",
    "get_htmx",
]
