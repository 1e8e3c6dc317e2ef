"""Unit tests for the trigger registry."""

import json

import pytest
from pydantic import ValidationError

from htmx_middleware.core.triggers import TriggerEntry, TriggerRegistry
from htmx_middleware.exceptions import InvalidTriggerError
from htmx_middleware.models import TriggerPayload, TriggerType


@pytest.fixture
def registry() -> TriggerRegistry:
    return TriggerRegistry()


class TestAdd:
    """Tests for registering triggers."""

    def test_empty_registry(self, registry: TriggerRegistry) -> None:
        assert len(registry) == 0
        assert not registry
        for trigger_type in TriggerType:
            assert registry.entries(trigger_type) == []

    def test_default_stage_is_standard(self, registry: TriggerRegistry) -> None:
        registry.add("saved")
        assert registry.entries(TriggerType.STANDARD) == [
            TriggerEntry(trigger_type=TriggerType.STANDARD, name="saved")
        ]

    def test_entries_are_immutable(self, registry: TriggerRegistry) -> None:
        registry.add("saved", TriggerPayload.text("x"))
        entry = registry.entries(TriggerType.STANDARD)[0]

        with pytest.raises(ValidationError):
            entry.name = "other"  # type: ignore[misc]

    def test_same_name_replaces_payload(self, registry: TriggerRegistry) -> None:
        """A second add for the same stage and name keeps one entry."""
        registry.add("foo", TriggerPayload.json(1))
        registry.add("foo", TriggerPayload.json(2))

        entries = registry.entries(TriggerType.STANDARD)
        assert len(entries) == 1
        assert entries[0].payload == TriggerPayload.json(2)

    def test_replace_keeps_first_seen_order(self, registry: TriggerRegistry) -> None:
        registry.add("a")
        registry.add("b")
        registry.add("a", TriggerPayload.text("again"))

        names = [entry.name for entry in registry.entries(TriggerType.STANDARD)]
        assert names == ["a", "b"]

    def test_replace_with_none_clears_payload(self, registry: TriggerRegistry) -> None:
        registry.add("foo", TriggerPayload.json(1))
        registry.add("foo")
        assert registry.entries(TriggerType.STANDARD)[0].payload is None

    def test_same_name_different_stages(self, registry: TriggerRegistry) -> None:
        registry.add("foo", trigger_type=TriggerType.STANDARD)
        registry.add("foo", trigger_type=TriggerType.AFTER_SWAP)
        registry.add("foo", trigger_type=TriggerType.AFTER_SETTLE)

        assert len(registry) == 3
        for trigger_type in TriggerType:
            assert len(registry.entries(trigger_type)) == 1

    def test_stage_given_as_string(self, registry: TriggerRegistry) -> None:
        registry.add("foo", trigger_type="after_swap")  # type: ignore[arg-type]
        assert len(registry.entries(TriggerType.AFTER_SWAP)) == 1

    def test_empty_name_rejected(self, registry: TriggerRegistry) -> None:
        with pytest.raises(InvalidTriggerError) as exc_info:
            registry.add("")
        assert exc_info.value.name == ""
        assert len(registry) == 0


class TestSerialize:
    """Tests for stage serialization."""

    def test_empty_stage(self, registry: TriggerRegistry) -> None:
        assert registry.serialize(TriggerType.STANDARD) is None

    def test_single_event_without_payload(self, registry: TriggerRegistry) -> None:
        registry.add("foo")
        assert registry.serialize(TriggerType.STANDARD) == "foo"

    def test_single_event_with_payload(self, registry: TriggerRegistry) -> None:
        registry.add("foo", TriggerPayload.json({"id": 1}))
        assert registry.serialize(TriggerType.STANDARD) == '{"foo":{"id":1}}'

    def test_several_events_without_payload(self, registry: TriggerRegistry) -> None:
        """More than one event always uses the JSON form."""
        registry.add("event1")
        registry.add("event2")
        assert registry.serialize(TriggerType.STANDARD) == '{"event1":null,"event2":null}'

    def test_mixed_payloads(self, registry: TriggerRegistry) -> None:
        registry.add("message", TriggerPayload.text("Task deleted"))
        registry.add("deleted")

        decoded = json.loads(registry.serialize(TriggerType.STANDARD) or "")
        assert decoded == {"message": "Task deleted", "deleted": None}
        assert list(decoded) == ["message", "deleted"]

    def test_text_payload_that_looks_like_json(self, registry: TriggerRegistry) -> None:
        registry.add("looks-like-json", TriggerPayload.text('{not: "json"'))
        decoded = json.loads(registry.serialize(TriggerType.STANDARD) or "")
        assert decoded["looks-like-json"] == '{not: "json"'

    def test_stages_are_independent(self, registry: TriggerRegistry) -> None:
        registry.add("standard")
        registry.add("swapped", TriggerPayload.boolean(True), TriggerType.AFTER_SWAP)

        assert registry.serialize(TriggerType.STANDARD) == "standard"
        assert registry.serialize(TriggerType.AFTER_SWAP) == '{"swapped":true}'
        assert registry.serialize(TriggerType.AFTER_SETTLE) is None


class TestToHeaders:
    """Tests for to_headers."""

    def test_no_triggers_no_headers(self, registry: TriggerRegistry) -> None:
        assert registry.to_headers() == {}

    def test_one_header_per_stage(self, registry: TriggerRegistry) -> None:
        registry.add("a")
        registry.add("b", trigger_type=TriggerType.AFTER_SETTLE)
        registry.add("c", trigger_type=TriggerType.AFTER_SWAP)

        assert registry.to_headers() == {
            "hx-trigger": "a",
            "hx-trigger-after-swap": "c",
            "hx-trigger-after-settle": "b",
        }
