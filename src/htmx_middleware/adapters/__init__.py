"""Framework adapters for htmx middleware.

Adapters convert framework-specific requests and responses to and from the
framework-agnostic core in ``htmx_middleware.core``.
"""

from htmx_middleware.adapters.asgi import HtmxASGIMiddleware, get_htmx

__all__ = ["HtmxASGIMiddleware", "get_htmx"]
