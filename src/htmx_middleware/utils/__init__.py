"""Utility modules for htmx middleware."""

from .headers import (
    RequestHeaders,
    ResponseHeaders,
    get_header_value,
    header_as_bool,
    header_as_str,
    is_valid_header_value,
    normalize_headers,
    set_header,
)

__all__ = [
    "RequestHeaders",
    "ResponseHeaders",
    "normalize_headers",
    "get_header_value",
    "header_as_str",
    "header_as_bool",
    "is_valid_header_value",
    "set_header",
]
