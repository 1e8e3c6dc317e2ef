"""Core type definitions and models for htmx middleware.

This module provides the data structures shared by the request context and
the trigger registry: the closed enumerations used on the wire, trigger
payloads, the HX-Location directive and the parsed request snapshot.

Examples:
    Building a location directive::

        from htmx_middleware.models import HxLocation, SwapType

        location = HxLocation(
            "/todos",
            target="#content",
            swap=SwapType.OUTER_HTML,
            values={"page": 2},
        )
        location.to_header_value()
        # '{"path":"/todos","target":"#content","swap":"outerHTML","values":{"page":2}}'

    Building trigger payloads::

        from htmx_middleware.models import TriggerPayload

        TriggerPayload.json({"id": 1, "complete": False})
        TriggerPayload.text("saved")
"""

import json
from enum import Enum
from functools import partial
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticSerializationError, to_jsonable_python

from htmx_middleware.exceptions import PayloadSerializationError
from htmx_middleware.utils.headers import (
    RawHeaders,
    RequestHeaders,
    ResponseHeaders,
    get_header_value,
    header_as_bool,
    header_as_str,
    normalize_headers,
)


def encode_json(value: Any) -> str:
    """Encode a JSON-compatible value as a compact header-safe string.

    Non-ASCII characters are escaped so the result is always writable into a
    response header. Pydantic models, dataclasses, dates, UUIDs and the like
    are encoded the way pydantic dumps them in JSON mode.
    """
    return json.dumps(
        value,
        separators=(",", ":"),
        allow_nan=False,
        default=to_jsonable_python,
    )


def to_json_value(value: Any) -> Any:
    """Convert a Python value into plain JSON-compatible data.

    Raises:
        PayloadSerializationError: If the value cannot be encoded as JSON.
    """
    try:
        encoded = encode_json(value)
    except (PydanticSerializationError, ValueError, TypeError, RecursionError) as e:
        raise PayloadSerializationError(
            message=f"Value of type {type(value).__name__} is not JSON serializable: {e}",
            cause=e,
        ) from e
    return json.loads(encoded)


class SwapType(str, Enum):
    """DOM insertion strategy htmx should use for the response content.

    Values are the tokens htmx expects in ``hx-swap`` and ``HX-Reswap``.
    """

    INNER_HTML = "innerHTML"
    OUTER_HTML = "outerHTML"
    BEFORE_BEGIN = "beforebegin"
    AFTER_BEGIN = "afterbegin"
    BEFORE_END = "beforeend"
    AFTER_END = "afterend"
    DELETE = "delete"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


class TriggerType(str, Enum):
    """Lifecycle stage at which htmx fires a server-sent trigger.

    Attributes:
        STANDARD: As soon as the response is received.
        AFTER_SWAP: After the new content has been swapped into the DOM.
        AFTER_SETTLE: After the settle phase has completed.
    """

    STANDARD = "standard"
    AFTER_SWAP = "after_swap"
    AFTER_SETTLE = "after_settle"

    def __str__(self) -> str:
        return self.value

    @property
    def header_name(self) -> str:
        """Response header carrying the triggers of this stage."""
        return _TRIGGER_HEADERS[self]


_TRIGGER_HEADERS = {
    TriggerType.STANDARD: ResponseHeaders.HX_TRIGGER,
    TriggerType.AFTER_SWAP: ResponseHeaders.HX_TRIGGER_AFTER_SWAP,
    TriggerType.AFTER_SETTLE: ResponseHeaders.HX_TRIGGER_AFTER_SETTLE,
}


class TriggerPayload:
    """Structured data attached to a trigger event.

    The value is converted to plain JSON data when the payload is built, so
    encoding problems surface at the call site rather than when the response
    headers are written.

    Examples:
        >>> TriggerPayload.json({"id": 1}).as_json_value()
        {'id': 1}
        >>> TriggerPayload.text('{not: "json"').as_json_value()
        '{not: "json"'
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        """Convert and store the payload value.

        Raises:
            PayloadSerializationError: If the value cannot be encoded.
        """
        self._value = to_json_value(value)

    @classmethod
    def json(cls, value: Any) -> "TriggerPayload":
        """Create a payload from any JSON-serializable value.

        Raises:
            PayloadSerializationError: If the value cannot be encoded.
        """
        return cls(value)

    @classmethod
    def from_value(cls, value: Any) -> "TriggerPayload":
        """Create a payload from already-plain JSON data."""
        return cls.json(value)

    @classmethod
    def text(cls, value: str) -> "TriggerPayload":
        return cls(str(value))

    @classmethod
    def boolean(cls, value: bool) -> "TriggerPayload":
        return cls(bool(value))

    @classmethod
    def number(cls, value: int | float) -> "TriggerPayload":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PayloadSerializationError(
                message=f"Expected a number, got {type(value).__name__}",
            )
        return cls.json(value)

    def as_json_value(self) -> Any:
        """Return the payload as plain JSON-compatible data."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriggerPayload):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(encode_json(self._value))

    def __repr__(self) -> str:
        return f"TriggerPayload({self._value!r})"


class HxLocation(BaseModel):
    """Descriptor for the ``HX-Location`` response header.

    HX-Location makes htmx perform a client-side navigation (an AJAX request
    swapped into the page) instead of a full page load, optionally with a
    different target, swap strategy, request values and headers.

    Attributes:
        path: URL to load.
        target: Selector of the element that receives the swap.
        source: Selector of the element treated as the request source.
        event: Event name that "triggered" the request.
        swap: Swap strategy for the follow-up request.
        headers: Extra headers sent with the follow-up request.
        values: Values submitted with the follow-up request.
        handler: Name of a client-side response handler.
        select: Selector of the response fragment to swap in.
        push: History path to push, or False to disable pushing.
        replace: Path replacing the current history entry.

    Examples:
        A path-only directive serializes to the bare path::

            >>> HxLocation("/todos").to_header_value()
            '/todos'

        Anything more serializes to a JSON object::

            >>> HxLocation("/todos", target="#list").to_header_value()
            '{"path":"/todos","target":"#list"}'
    """

    path: str = Field(..., min_length=1, description="URL to load")
    target: str | None = Field(default=None, description="Swap target selector")
    source: str | None = Field(default=None, description="Request source selector")
    event: str | None = Field(default=None, description="Triggering event name")
    swap: SwapType | None = Field(default=None, description="Swap strategy")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers for the follow-up request",
    )
    values: Any = Field(default=None, description="Values for the follow-up request")
    handler: str | None = Field(default=None, description="Client-side response handler")
    select: str | None = Field(default=None, description="Response fragment selector")
    push: str | bool | None = Field(
        default=None,
        description="History path to push, or False to disable",
    )
    replace: str | None = Field(default=None, description="History path to replace")

    model_config = {"frozen": True}

    def __init__(self, path: str, **data: Any) -> None:
        super().__init__(path=path, **data)

    @field_validator("values", mode="before")
    @classmethod
    def validate_values(cls, v: Any) -> Any:
        """Convert values to plain JSON data.

        Raises:
            PayloadSerializationError: If the values cannot be encoded. This
                error is not wrapped in a ValidationError.
        """
        if v is None:
            return None
        return to_json_value(v)

    @field_validator("push")
    @classmethod
    def validate_push(cls, v: str | bool | None) -> str | bool | None:
        """Only a path or False are meaningful history push values."""
        if v is True:
            raise ValueError("push must be a path or False")
        return v

    def disable_push(self) -> "HxLocation":
        """Return a copy that prevents htmx from pushing a history entry."""
        return self.model_copy(update={"push": False})

    def header(self, name: str, value: str) -> "HxLocation":
        """Return a copy with one more header for the follow-up request.

        Example:
            >>> HxLocation("/todos").header("X-Page", "2").headers
            {'X-Page': '2'}
        """
        return self.model_copy(update={"headers": {**self.headers, name: value}})

    def is_simple(self) -> bool:
        """True when only the path is set."""
        return self.to_dict().keys() == {"path"}

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form, omitting unset keys."""
        data: dict[str, Any] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None or (name == "headers" and not value):
                continue
            data[name] = value.value if isinstance(value, SwapType) else value
        return data

    def to_header_value(self) -> str:
        """Encode the directive as an ``HX-Location`` header value."""
        if self.is_simple():
            return self.path
        return encode_json(self.to_dict())


class RequestSnapshot(BaseModel):
    """Typed view of the htmx request headers of one request.

    Built once per request and never mutated. Parsing never fails: absent,
    undecodable or unexpected values fall back to False / None.

    Attributes:
        is_htmx: ``HX-Request`` is ``true``.
        boosted: ``HX-Boosted`` is ``true``.
        history_restore_request: ``HX-History-Restore-Request`` is ``true``.
        current_url: ``HX-Current-URL``, the browser's current URL.
        prompt: ``HX-Prompt``, the user's answer to an ``hx-prompt``.
        target: ``HX-Target``, id of the target element.
        trigger_id: ``HX-Trigger``, id of the triggering element.
        trigger_name: ``HX-Trigger-Name``, name of the triggering element.
    """

    is_htmx: bool = False
    boosted: bool = False
    history_restore_request: bool = False
    current_url: str | None = None
    prompt: str | None = None
    target: str | None = None
    trigger_id: str | None = None
    trigger_name: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_headers(cls, headers: RawHeaders) -> "RequestSnapshot":
        """Parse a raw request header set.

        Args:
            headers: Mapping or iterable of (name, value) pairs; names are
                matched case-insensitively.

        Returns:
            The parsed snapshot.

        Example:
            >>> snapshot = RequestSnapshot.from_headers(
            ...     {"HX-Request": "true", "HX-Target": "#content"}
            ... )
            >>> snapshot.is_htmx, snapshot.target, snapshot.boosted
            (True, '#content', False)
        """
        get = partial(get_header_value, normalize_headers(headers))

        return cls(
            is_htmx=header_as_bool(get(RequestHeaders.HX_REQUEST)),
            boosted=header_as_bool(get(RequestHeaders.HX_BOOSTED)),
            history_restore_request=header_as_bool(
                get(RequestHeaders.HX_HISTORY_RESTORE_REQUEST)
            ),
            current_url=header_as_str(get(RequestHeaders.HX_CURRENT_URL)),
            prompt=header_as_str(get(RequestHeaders.HX_PROMPT)),
            target=header_as_str(get(RequestHeaders.HX_TARGET)),
            trigger_id=header_as_str(get(RequestHeaders.HX_TRIGGER)),
            trigger_name=header_as_str(get(RequestHeaders.HX_TRIGGER_NAME)),
        )
