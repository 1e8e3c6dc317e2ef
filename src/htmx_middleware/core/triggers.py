"""Trigger accumulation and serialization for htmx responses.

Handlers ask the client to fire named events by registering triggers. Each
trigger belongs to one lifecycle stage, and each stage is sent in its own
response header:

- STANDARD -> ``HX-Trigger``
- AFTER_SWAP -> ``HX-Trigger-After-Swap``
- AFTER_SETTLE -> ``HX-Trigger-After-Settle``

Within a stage, event names are unique: registering the same name again
replaces the earlier payload but keeps the event's original position.

Serialization of one stage:

- exactly one event without payload: the bare event name (``item-saved``)
- otherwise: a JSON object mapping event names to payloads, ``null`` for
  events registered without one (``{"item-saved":{"id":1},"refresh":null}``)

Examples:
    >>> registry = TriggerRegistry()
    >>> registry.add("item-saved")
    >>> registry.serialize(TriggerType.STANDARD)
    'item-saved'
    >>> registry.add("item-saved", TriggerPayload.json({"id": 1}))
    >>> registry.serialize(TriggerType.STANDARD)
    '{"item-saved":{"id":1}}'
"""

from pydantic import BaseModel, Field

from htmx_middleware.exceptions import InvalidTriggerError
from htmx_middleware.models import TriggerPayload, TriggerType, encode_json


class TriggerEntry(BaseModel):
    """One registered trigger.

    Attributes:
        trigger_type: Lifecycle stage of the event
        name: Event name (non-empty)
        payload: Optional data sent with the event
    """

    trigger_type: TriggerType = Field(..., description="Lifecycle stage")
    name: str = Field(..., min_length=1, description="Event name")
    payload: TriggerPayload | None = Field(default=None, description="Event data")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class TriggerRegistry:
    """Ordered, per-stage accumulator of trigger events for one request."""

    def __init__(self) -> None:
        # dicts keep first-insertion order when a key is overwritten
        self._stages: dict[TriggerType, dict[str, TriggerPayload | None]] = {
            trigger_type: {} for trigger_type in TriggerType
        }

    def add(
        self,
        name: str,
        payload: TriggerPayload | None = None,
        trigger_type: TriggerType = TriggerType.STANDARD,
    ) -> None:
        """Register a trigger, replacing the payload of an existing one.

        Args:
            name: Event name
            payload: Optional event data
            trigger_type: Lifecycle stage

        Raises:
            InvalidTriggerError: If the name is empty
        """
        if not isinstance(name, str) or not name:
            raise InvalidTriggerError(
                message="Trigger event name must be a non-empty string",
                name=name,
            )
        self._stages[TriggerType(trigger_type)][name] = payload

    def entries(self, trigger_type: TriggerType) -> list[TriggerEntry]:
        """Return the triggers of one stage in first-registration order."""
        return [
            TriggerEntry(trigger_type=trigger_type, name=name, payload=payload)
            for name, payload in self._stages[trigger_type].items()
        ]

    def __len__(self) -> int:
        return sum(len(stage) for stage in self._stages.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def serialize(self, trigger_type: TriggerType) -> str | None:
        """Encode one stage as a header value.

        Returns:
            The header value, or None when no trigger was registered for the
            stage.
        """
        stage = self._stages[trigger_type]
        if not stage:
            return None

        if len(stage) == 1:
            ((name, payload),) = stage.items()
            if payload is None:
                return name

        return encode_json(
            {
                name: payload.as_json_value() if payload is not None else None
                for name, payload in stage.items()
            }
        )

    def to_headers(self) -> dict[str, str]:
        """Encode every non-empty stage into its response header."""
        headers: dict[str, str] = {}
        for trigger_type in TriggerType:
            value = self.serialize(trigger_type)
            if value is not None:
                headers[trigger_type.header_name] = value
        return headers
