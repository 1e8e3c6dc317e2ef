"""Unit tests for header parsing utilities."""

from starlette.datastructures import MutableHeaders

from htmx_middleware.utils.headers import (
    RequestHeaders,
    ResponseHeaders,
    get_header_value,
    header_as_bool,
    header_as_str,
    is_valid_header_value,
    normalize_headers,
    set_header,
)


class TestHeaderNames:
    """Tests for the header name constants."""

    def test_request_header_names_are_lowercase(self):
        """Request header names should be lowercase wire names."""
        assert RequestHeaders.HX_REQUEST == "hx-request"
        assert RequestHeaders.HX_HISTORY_RESTORE_REQUEST == "hx-history-restore-request"
        assert RequestHeaders.HX_TRIGGER_NAME == "hx-trigger-name"

    def test_response_header_names(self):
        """Response header names should match htmx's."""
        assert ResponseHeaders.HX_TRIGGER == "hx-trigger"
        assert ResponseHeaders.HX_TRIGGER_AFTER_SWAP == "hx-trigger-after-swap"
        assert ResponseHeaders.HX_TRIGGER_AFTER_SETTLE == "hx-trigger-after-settle"
        assert ResponseHeaders.HX_PUSH_URL == "hx-push-url"
        assert ResponseHeaders.HX_REPLACE_URL == "hx-replace-url"


class TestNormalizeHeaders:
    """Tests for normalize_headers function."""

    def test_mapping_keys_lowercased(self):
        """Mapping keys should be lowercased."""
        result = normalize_headers({"HX-Request": "true", "HX-Target": "#main"})
        assert result == {"hx-request": "true", "hx-target": "#main"}

    def test_raw_byte_pairs(self):
        """ASGI raw header pairs should be decoded."""
        result = normalize_headers([(b"hx-request", b"true"), (b"HX-Prompt", b"yes")])
        assert result == {"hx-request": "true", "hx-prompt": "yes"}

    def test_utf8_values_decoded(self):
        """UTF-8 byte values should be decoded to text."""
        result = normalize_headers([(b"hx-prompt", "café".encode())])
        assert result == {"hx-prompt": "café"}

    def test_undecodable_values_kept_as_bytes(self):
        """Invalid UTF-8 should stay bytes, not raise."""
        result = normalize_headers([(b"hx-prompt", b"\xff\xff")])
        assert result == {"hx-prompt": b"\xff\xff"}

    def test_later_duplicates_win(self):
        """The last occurrence of a header should win."""
        result = normalize_headers([(b"hx-target", b"#a"), (b"HX-Target", b"#b")])
        assert result == {"hx-target": "#b"}

    def test_empty_headers(self):
        """Should handle empty headers."""
        assert normalize_headers({}) == {}
        assert normalize_headers([]) == {}


class TestGetHeaderValue:
    """Tests for get_header_value function."""

    def test_case_insensitive_lookup(self):
        """Lookup should ignore case."""
        headers = {"HX-Target": "#content"}
        assert get_header_value(headers, "hx-target") == "#content"
        assert get_header_value(headers, "HX-TARGET") == "#content"

    def test_missing_returns_default(self):
        """Missing headers should return the default."""
        assert get_header_value({}, "hx-target") is None
        assert get_header_value({}, "hx-target", "fallback") == "fallback"


class TestHeaderAsStr:
    """Tests for header_as_str function."""

    def test_text_value(self):
        assert header_as_str("#content") == "#content"

    def test_absent_value(self):
        assert header_as_str(None) is None

    def test_valid_bytes(self):
        assert header_as_str(b"#content") == "#content"

    def test_invalid_bytes(self):
        """Undecodable bytes should degrade to None."""
        assert header_as_str(b"\xff\xff") is None

    def test_empty_string_is_kept(self):
        """An empty but present header is still text."""
        assert header_as_str("") == ""


class TestHeaderAsBool:
    """Tests for header_as_bool function."""

    def test_true_token(self):
        assert header_as_bool("true") is True

    def test_true_bytes(self):
        assert header_as_bool(b"true") is True

    def test_surrounding_whitespace(self):
        assert header_as_bool(" true ") is True

    def test_false_token(self):
        assert header_as_bool("false") is False

    def test_other_tokens_are_false(self):
        """Only the exact lowercase token counts."""
        for value in ("True", "TRUE", "1", "yes", "on", "", "truthy"):
            assert header_as_bool(value) is False, value

    def test_absent_is_false(self):
        assert header_as_bool(None) is False

    def test_undecodable_is_false(self):
        assert header_as_bool(b"\xff\xff") is False


class TestIsValidHeaderValue:
    """Tests for is_valid_header_value function."""

    def test_plain_values(self):
        assert is_valid_header_value("/todos") is True
        assert is_valid_header_value('{"a":1}') is True
        assert is_valid_header_value("") is True

    def test_line_breaks_rejected(self):
        assert is_valid_header_value("/a\r\nSet-Cookie: x=1") is False
        assert is_valid_header_value("/a\nb") is False
        assert is_valid_header_value("/a\rb") is False

    def test_nul_rejected(self):
        assert is_valid_header_value("/a\x00") is False

    def test_other_control_characters_rejected(self):
        assert is_valid_header_value("#a\x0bb") is False
        assert is_valid_header_value("#a\x1fb") is False
        assert is_valid_header_value("#a\x7fb") is False

    def test_tab_accepted(self):
        assert is_valid_header_value("a\tb") is True

    def test_non_latin1_rejected(self):
        assert is_valid_header_value("/todos/日本") is False

    def test_latin1_accepted(self):
        assert is_valid_header_value("/café") is True


class TestSetHeader:
    """Tests for set_header function."""

    def test_sets_new_header(self):
        headers: dict[str, str] = {}
        set_header(headers, "hx-redirect", "/new")
        assert headers == {"hx-redirect": "/new"}

    def test_replaces_differently_cased_header(self):
        """Existing values should be replaced regardless of case."""
        headers = {"HX-Redirect": "/old", "Content-Type": "text/html"}
        set_header(headers, "hx-redirect", "/new")
        assert headers == {"Content-Type": "text/html", "hx-redirect": "/new"}

    def test_starlette_mutable_headers(self):
        """Should overwrite rather than append on Starlette headers."""
        headers = MutableHeaders()
        headers.append("HX-Trigger", "old")
        headers.append("HX-Trigger", "older")

        set_header(headers, "hx-trigger", "new")

        assert headers.getlist("hx-trigger") == ["new"]
