"""Configuration module for htmx middleware.

This module provides the HtmxConfig class for configuring how the middleware
exposes the per-request context and when it writes htmx response headers.

Example:
    Basic usage with defaults:

        >>> config = HtmxConfig()
        >>> config.state_attribute
        'htmx'

    Custom configuration:

        >>> config = HtmxConfig(
        ...     state_attribute="hx",
        ...     emit_for_non_htmx=False,
        ... )

    Loading from environment:

        >>> import os
        >>> os.environ['HTMX_EMIT_FOR_NON_HTMX'] = 'false'
        >>> config = HtmxConfig.from_env()

    Loading from dictionary:

        >>> config = HtmxConfig.from_dict({'metrics_enabled': False})
"""

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

# request.state attribute holding the middleware config
CONFIG_STATE_ATTRIBUTE = "htmx_config"

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


class HtmxConfig(BaseModel):
    """Configuration for htmx middleware.

    Attributes:
        state_attribute: Name of the ``request.state`` attribute holding the
            per-request Htmx context. Must be a valid Python identifier.
            Default is "htmx".
        emit_for_non_htmx: Whether directives queued while handling a request
            without ``HX-Request: true`` are written to the response. Default
            is True.
        metrics_enabled: Whether Prometheus metrics are recorded. Default is
            True.

    Note:
        This class is immutable (frozen=True). Create a new instance if you
        need different settings.
    """

    state_attribute: str = Field(
        default="htmx",
        description="request.state attribute holding the Htmx context",
    )
    emit_for_non_htmx: bool = Field(
        default=True,
        description="Write htmx response headers for non-htmx requests",
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Record Prometheus metrics",
    )

    model_config = {"frozen": True}

    @field_validator("state_attribute")
    @classmethod
    def validate_state_attribute(cls, v: str) -> str:
        """Validate the state attribute name.

        Raises:
            ValueError: If the name is not a valid identifier.

        Example:
            >>> HtmxConfig(state_attribute="hx").state_attribute
            'hx'
        """
        if not v.isidentifier():
            raise ValueError(f"state_attribute must be a valid identifier, got {v!r}")
        if v == CONFIG_STATE_ATTRIBUTE:
            raise ValueError(f"state_attribute {v!r} is reserved")
        return v

    @field_validator("emit_for_non_htmx", "metrics_enabled", mode="before")
    @classmethod
    def validate_flag(cls, v: Any) -> Any:
        """Accept the usual textual spellings of booleans.

        Example:
            >>> HtmxConfig(metrics_enabled="off").metrics_enabled
            False
        """
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise ValueError(f"Invalid boolean value: {v!r}")
        return v

    @classmethod
    def from_env(cls, prefix: str = "HTMX_") -> "HtmxConfig":
        """Create configuration from environment variables.

        Variable names are uppercase field names with the prefix, e.g.
        ``HTMX_STATE_ATTRIBUTE``. Missing variables use the defaults.

        Args:
            prefix: Prefix for environment variable names. Default is "HTMX_".

        Returns:
            HtmxConfig instance populated from environment variables.
        """
        config_dict: dict[str, Any] = {}

        for field_name in cls.model_fields:
            env_value = os.environ.get(f"{prefix}{field_name.upper()}")
            if env_value is not None:
                config_dict[field_name] = env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "HtmxConfig":
        """Create configuration from a dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)
