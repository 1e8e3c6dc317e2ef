"""Core logic for htmx header handling.

This package contains:
- Triggers: per-stage accumulation and serialization of trigger events
- Context: the per-request Htmx object handlers interact with
- Middleware: framework-agnostic creation and flushing of the context

The core logic is framework-agnostic and can be wrapped by adapters for
different web frameworks.
"""

from htmx_middleware.core.context import Htmx
from htmx_middleware.core.middleware import HtmxMiddleware
from htmx_middleware.core.triggers import TriggerEntry, TriggerRegistry

__all__ = ["Htmx", "HtmxMiddleware", "TriggerEntry", "TriggerRegistry"]
