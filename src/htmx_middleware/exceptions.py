"""Custom exceptions for the htmx middleware.

Only two operations in this package can fail: building a trigger payload
(or the ``values`` of an HX-Location directive) from data that cannot be
encoded as JSON, and registering a trigger without a name. Both fail at the
call site, before anything is recorded on the request context.

Examples:
    Handling an unserializable payload::

        from htmx_middleware.exceptions import PayloadSerializationError

        try:
            htmx.trigger_event("item-saved", {"when": object()})
        except PayloadSerializationError as e:
            logger.warning("trigger.skipped", error=str(e))
"""


class HtmxError(Exception):
    """Base exception for all htmx-middleware errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class PayloadSerializationError(HtmxError):
    """A trigger payload or location value could not be encoded as JSON.

    Raised when the payload is constructed, never deferred to the flush at
    the end of the request. The request context is left unchanged.

    Attributes:
        message: Human-readable error description.
        cause: The underlying encoding error, if any.

    Examples:
        Raising from a conversion failure::

            try:
                converted = to_jsonable_python(value)
            except PydanticSerializationError as e:
                raise PayloadSerializationError(
                    message=f"Payload is not JSON serializable: {e}",
                    cause=e,
                ) from e
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize the serialization error with details.

        Args:
            message: Human-readable error description.
            cause: The underlying exception that caused the failure.
        """
        super().__init__(message)
        self.cause = cause


class InvalidTriggerError(HtmxError):
    """A trigger was registered with an invalid event name.

    Attributes:
        message: Human-readable error description.
        name: The rejected event name.
    """

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.name = name
