"""ASGI middleware adapter for FastAPI and Starlette applications.

The middleware:
1. Builds the per-request Htmx context from the raw request headers
2. Stores it on ``request.state`` for the handler
3. Writes the queued htmx headers into the handler's response

Examples:
    FastAPI integration::

        from fastapi import Depends, FastAPI
        from htmx_middleware.adapters.asgi import HtmxASGIMiddleware, get_htmx
        from htmx_middleware.core.context import Htmx

        app = FastAPI()
        app.add_middleware(HtmxASGIMiddleware)

        @app.post("/todos")
        async def create_todo(htmx: Htmx = Depends(get_htmx)):
            htmx.trigger_event("todo-created")
            return HTMLResponse("<li>New todo</li>")

    Starlette integration::

        from starlette.applications import Starlette
        from starlette.middleware import Middleware

        middleware = [
            Middleware(HtmxASGIMiddleware, config=HtmxConfig(state_attribute="hx")),
        ]

        app = Starlette(middleware=middleware)
"""

from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from htmx_middleware.config import CONFIG_STATE_ATTRIBUTE, HtmxConfig
from htmx_middleware.core.context import Htmx
from htmx_middleware.core.middleware import HtmxMiddleware
from htmx_middleware.observability.logging import get_logger

logger = get_logger(__name__)


class HtmxASGIMiddleware(BaseHTTPMiddleware):
    """ASGI middleware exposing an Htmx context to each request.

    Attributes:
        config: Configuration object
        middleware: Core middleware instance
    """

    def __init__(self, app: Any, config: HtmxConfig | None = None) -> None:
        """Initialize the ASGI middleware.

        Args:
            app: The ASGI application
            config: Configuration object (uses defaults if not provided)
        """
        super().__init__(app)
        self.config = config or HtmxConfig()
        self.middleware = HtmxMiddleware(self.config)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Run the handler with an Htmx context and apply its directives.

        Args:
            request: The Starlette request object
            call_next: Function to call the next middleware/handler

        Returns:
            The handler's response with htmx headers added
        """
        # Raw byte pairs, so undecodable values can degrade to None
        htmx = self.middleware.begin(request.headers.raw)

        setattr(request.state, self.config.state_attribute, htmx)
        setattr(request.state, CONFIG_STATE_ATTRIBUTE, self.config)

        response = await call_next(request)

        self.middleware.finish(htmx, response.headers)
        return response


def get_htmx(request: Request) -> Htmx:
    """Return the Htmx context of the current request.

    Use as a FastAPI dependency: ``htmx: Htmx = Depends(get_htmx)``.

    When the middleware is not installed, a detached context is built from
    the request headers. Reading it works as usual, but its directives are
    never written to the response.
    """
    config = getattr(request.state, CONFIG_STATE_ATTRIBUTE, None)
    attribute = config.state_attribute if config is not None else HtmxConfig().state_attribute

    htmx = getattr(request.state, attribute, None)
    if isinstance(htmx, Htmx):
        return htmx

    logger.debug("htmx.context.detached", path=request.url.path)
    return Htmx.from_headers(request.headers.raw)
