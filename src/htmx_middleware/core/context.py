"""Per-request htmx context.

An :class:`Htmx` instance is created once per request from the incoming
headers. Handlers read the parsed htmx request headers from it and queue
response directives and trigger events on it. After the handler returns, the
middleware calls :meth:`Htmx.flush` once and writes the result into the
response headers.

The context is owned by a single request and is not shared across requests
or threads, so it carries no locking.

Examples:
    Inside a handler::

        async def update_todo(htmx: Htmx = Depends(get_htmx)):
            if not htmx.is_htmx:
                return RedirectResponse("/")

            htmx.trigger_event("todo-updated", {"id": 3})
            htmx.reswap(SwapType.OUTER_HTML)
            htmx.push_url("/todos/3")
            return HTMLResponse(render_todo(3))
"""

from typing import Any

from htmx_middleware.core.triggers import TriggerRegistry
from htmx_middleware.models import (
    HxLocation,
    RequestSnapshot,
    SwapType,
    TriggerPayload,
    TriggerType,
)
from htmx_middleware.utils.headers import RawHeaders, ResponseHeaders

# Value htmx expects in HX-Refresh
REFRESH_TOKEN = "true"


class Htmx:
    """Request/response context for one htmx request.

    Attributes:
        snapshot: Parsed htmx request headers
        triggers: Registered trigger events
    """

    def __init__(self, snapshot: RequestSnapshot | None = None) -> None:
        """Initialize the context.

        Args:
            snapshot: Parsed request headers (an empty snapshot if omitted)
        """
        self.snapshot = snapshot or RequestSnapshot()
        self.triggers = TriggerRegistry()
        self._directives: dict[str, str] = {}
        self._location: HxLocation | None = None

    @classmethod
    def from_headers(cls, headers: RawHeaders) -> "Htmx":
        """Build a context from a raw request header set. Never fails."""
        return cls(RequestSnapshot.from_headers(headers))

    @property
    def is_htmx(self) -> bool:
        return self.snapshot.is_htmx

    @property
    def boosted(self) -> bool:
        return self.snapshot.boosted

    @property
    def history_restore_request(self) -> bool:
        return self.snapshot.history_restore_request

    @property
    def current_url(self) -> str | None:
        return self.snapshot.current_url

    @property
    def prompt(self) -> str | None:
        return self.snapshot.prompt

    @property
    def target(self) -> str | None:
        return self.snapshot.target

    @property
    def trigger_id(self) -> str | None:
        return self.snapshot.trigger_id

    @property
    def trigger_name(self) -> str | None:
        return self.snapshot.trigger_name

    @property
    def directives(self) -> dict[str, str]:
        """Copy of the pending single-value response directives."""
        return dict(self._directives)

    @property
    def location(self) -> HxLocation | None:
        return self._location

    def redirect(self, url: str) -> None:
        """Make htmx perform a full-page redirect (``HX-Redirect``)."""
        self._directives[ResponseHeaders.HX_REDIRECT] = url

    def redirect_with_location(self, location: HxLocation) -> None:
        """Make htmx navigate without a page reload (``HX-Location``).

        Takes precedence over :meth:`redirect` when both are set.
        """
        self._location = location

    def redirect_with_swap(self, path: str) -> None:
        """Shortcut for a path-only :meth:`redirect_with_location`."""
        self.redirect_with_location(HxLocation(path))

    def refresh(self) -> None:
        """Make htmx do a full page refresh (``HX-Refresh``)."""
        self._directives[ResponseHeaders.HX_REFRESH] = REFRESH_TOKEN

    def push_url(self, url: str) -> None:
        """Push a new entry into the browser history (``HX-Push-Url``)."""
        self._directives[ResponseHeaders.HX_PUSH_URL] = url

    def replace_url(self, url: str) -> None:
        """Replace the current browser history entry (``HX-Replace-Url``)."""
        self._directives[ResponseHeaders.HX_REPLACE_URL] = url

    def reswap(self, swap_type: SwapType | str) -> None:
        """Override the swap strategy of the response (``HX-Reswap``).

        Raises:
            ValueError: If a string is given that is not a swap token
        """
        self._directives[ResponseHeaders.HX_RESWAP] = SwapType(swap_type).value

    def retarget(self, selector: str) -> None:
        """Override the element that receives the swap (``HX-Retarget``)."""
        self._directives[ResponseHeaders.HX_RETARGET] = selector

    def reselect(self, selector: str) -> None:
        """Override the response fragment to swap in (``HX-Reselect``)."""
        self._directives[ResponseHeaders.HX_RESELECT] = selector

    def trigger_event(
        self,
        name: str,
        payload: TriggerPayload | Any = None,
        trigger_type: TriggerType | None = None,
    ) -> None:
        """Ask the client to fire an event.

        Registering the same name twice for the same stage keeps one event
        carrying the latest payload.

        Args:
            name: Event name
            payload: Event data; anything other than a TriggerPayload is
                converted with :meth:`TriggerPayload.json`
            trigger_type: Lifecycle stage (STANDARD if omitted)

        Raises:
            PayloadSerializationError: If the payload cannot be encoded. No
                trigger is recorded.
            InvalidTriggerError: If the name is empty
        """
        if payload is not None and not isinstance(payload, TriggerPayload):
            payload = TriggerPayload.json(payload)

        self.triggers.add(name, payload, trigger_type or TriggerType.STANDARD)

    def flush(self) -> dict[str, str]:
        """Collect every pending response header.

        Must be called exactly once, after the handler has returned.

        Returns:
            Response header names mapped to their values
        """
        headers = self.triggers.to_headers()
        headers.update(self._directives)

        if self._location is not None:
            headers.pop(ResponseHeaders.HX_REDIRECT, None)
            headers[ResponseHeaders.HX_LOCATION] = self._location.to_header_value()

        return headers

    def __repr__(self) -> str:
        return (
            f"Htmx(is_htmx={self.is_htmx}, boosted={self.boosted}, "
            f"directives={len(self._directives)}, triggers={len(self.triggers)})"
        )
