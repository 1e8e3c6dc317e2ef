"""
Pytest configuration and shared fixtures for htmx_middleware tests.
"""

import pytest

from htmx_middleware.core.context import Htmx


@pytest.fixture
def htmx_request_headers() -> dict[str, str]:
    """Provide the headers htmx sends for a typical button click."""
    return {
        "HX-Request": "true",
        "HX-Current-URL": "http://example.com/todos",
        "HX-Target": "todo-list",
        "HX-Trigger": "add-button",
        "HX-Trigger-Name": "add",
    }


@pytest.fixture
def htmx(htmx_request_headers: dict[str, str]) -> Htmx:
    """Provide a context built from an htmx request."""
    return Htmx.from_headers(htmx_request_headers)
