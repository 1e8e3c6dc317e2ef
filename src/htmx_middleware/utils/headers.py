"""Header names and header parsing utilities for htmx middleware.

This module provides:
- The fixed request and response header names used by htmx
- Normalization of raw header sets (mappings or ASGI byte pairs)
- Lenient typed parsing of inbound header values
- Case-insensitive writes into outgoing header collections
"""

from collections.abc import Iterable, Mapping, MutableMapping
from typing import Union

HeaderValue = Union[str, bytes]
RawHeaders = Union[Mapping[str, HeaderValue], Iterable[tuple[HeaderValue, HeaderValue]]]

# Token htmx sends for boolean request headers
TRUE_TOKEN = "true"


class RequestHeaders:
    """Request headers sent by the htmx client (lowercase wire names)."""

    HX_REQUEST = "hx-request"
    HX_BOOSTED = "hx-boosted"
    HX_CURRENT_URL = "hx-current-url"
    HX_HISTORY_RESTORE_REQUEST = "hx-history-restore-request"
    HX_PROMPT = "hx-prompt"
    HX_TARGET = "hx-target"
    HX_TRIGGER = "hx-trigger"
    HX_TRIGGER_NAME = "hx-trigger-name"


class ResponseHeaders:
    """Response headers understood by the htmx client (lowercase wire names)."""

    HX_LOCATION = "hx-location"
    HX_PUSH_URL = "hx-push-url"
    HX_REDIRECT = "hx-redirect"
    HX_REFRESH = "hx-refresh"
    HX_REPLACE_URL = "hx-replace-url"
    HX_RESWAP = "hx-reswap"
    HX_RETARGET = "hx-retarget"
    HX_RESELECT = "hx-reselect"
    HX_TRIGGER = "hx-trigger"
    HX_TRIGGER_AFTER_SETTLE = "hx-trigger-after-settle"
    HX_TRIGGER_AFTER_SWAP = "hx-trigger-after-swap"


def normalize_headers(headers: RawHeaders) -> dict[str, HeaderValue]:
    """Normalize a raw header set into a lowercase-keyed dictionary.

    Accepts either a mapping (e.g. a plain dict or Starlette ``Headers``) or
    an iterable of ``(name, value)`` pairs such as ASGI's raw header list.
    Byte names are decoded as latin-1. Byte values are decoded as UTF-8 when
    possible and kept as bytes otherwise, so callers can tell undecodable
    values apart from absent ones.

    Later duplicates of the same header override earlier ones.

    Args:
        headers: Raw request headers

    Returns:
        Dictionary of lowercase header names to values

    Example:
        >>> normalize_headers([(b"HX-Request", b"true"), (b"HX-Target", b"#main")])
        {'hx-request': 'true', 'hx-target': '#main'}
        >>> normalize_headers({"HX-Prompt": b"\\xff"})
        {'hx-prompt': b'\\xff'}
    """
    pairs = headers.items() if isinstance(headers, Mapping) else headers

    normalized: dict[str, HeaderValue] = {}
    for name, value in pairs:
        if isinstance(name, bytes):
            name = name.decode("latin-1")
        if isinstance(value, bytes):
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError:
                pass
        normalized[name.lower()] = value

    return normalized


def get_header_value(
    headers: Mapping[str, HeaderValue],
    header_name: str,
    default: HeaderValue | None = None,
) -> HeaderValue | None:
    """Get header value with case-insensitive lookup.

    Args:
        headers: Headers dictionary
        header_name: Name of header to find (case-insensitive)
        default: Default value if header not found

    Returns:
        Header value or default

    Example:
        >>> headers = {"HX-Target": "#content"}
        >>> get_header_value(headers, "hx-target")
        '#content'
        >>> get_header_value(headers, "missing", "default")
        'default'
    """
    header_name_lower = header_name.lower()

    for key, value in headers.items():
        if key.lower() == header_name_lower:
            return value

    return default


def header_as_str(value: HeaderValue | None) -> str | None:
    """Interpret a header value as text.

    Absent values and byte values that are not valid UTF-8 yield None.

    Example:
        >>> header_as_str("#content")
        '#content'
        >>> header_as_str(b"\\xff\\xff") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return None
    return value


def header_as_bool(value: HeaderValue | None) -> bool:
    """Interpret a header value as an htmx boolean flag.

    Only the exact token ``true`` counts; anything else, including absent or
    undecodable values, is False.

    Example:
        >>> header_as_bool("true")
        True
        >>> header_as_bool("TRUE")
        False
        >>> header_as_bool(None)
        False
    """
    text = header_as_str(value)
    if text is None:
        return False
    return text.strip(" \t") == TRUE_TOKEN


def is_valid_header_value(value: str) -> bool:
    """Check that a value can be written into an HTTP/1.1 response header.

    Rejects control characters other than tab (CR and LF allow header
    injection) and characters outside latin-1.

    Example:
        >>> is_valid_header_value("/todos")
        True
        >>> is_valid_header_value("/todos\\r\\nSet-Cookie: x=1")
        False
    """
    if any((ch < " " and ch != "\t") or ch == "\x7f" for ch in value):
        return False
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def set_header(headers: MutableMapping[str, str], name: str, value: str) -> None:
    """Set a header, replacing any existing value regardless of case.

    Works with plain dicts as well as Starlette ``MutableHeaders``.

    Example:
        >>> headers = {"HX-Redirect": "/old"}
        >>> set_header(headers, "hx-redirect", "/new")
        >>> headers
        {'hx-redirect': '/new'}
    """
    name_lower = name.lower()
    for key in dict.fromkeys(key for key in headers.keys() if key.lower() == name_lower):
        del headers[key]
    headers[name] = value
