"""Tests for the partial-payload merge engine."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pydisco.client import DiscoClient
from pydisco.config import DiscoConfig
from pydisco.exceptions import DiscoTimestampError
from pydisco.ingestion.normalize import parse_iso_timestamp
from pydisco.models.automod import AutomodAction, AutomodActionType, AutomodRule
from pydisco.models.scheduled_event import GuildScheduledEvent, ScheduledEventStatus
from pydisco.state.merge import FieldSpec, ListFieldSpec, NestedFieldSpec, merge


class _Thing:
    """Plain target so the engine is tested without entity plumbing."""

    count: int | None = None
    label: str | None = None
    note: str | None = None
    when: datetime | None = None
    left: str | None = None
    right: str | None = None
    items: list[str] | None = None


_FIELDS = (
    FieldSpec("count", "count", int),
    FieldSpec("label", "label"),
    FieldSpec("note_text", "note", nullable=True),
    FieldSpec("when", "when", parse_iso_timestamp),
    NestedFieldSpec("meta", {"left": "l", "right": "r"}),
    ListFieldSpec("items", "items", str.upper),
)


class TestMergeEngine:
    def test_absent_keys_are_left_untouched(self) -> None:
        thing = _Thing()
        merge(thing, {"count": 1, "label": "a", "meta": {"l": "x", "r": "y"}}, _FIELDS)

        merge(thing, {"count": 2}, _FIELDS)

        assert thing.count == 2
        assert thing.label == "a"
        assert (thing.left, thing.right) == ("x", "y")

    def test_falsy_values_count_as_present(self) -> None:
        thing = _Thing()
        merge(thing, {"count": 5, "label": "a", "items": ["x"]}, _FIELDS)

        merge(thing, {"count": 0, "label": "", "items": []}, _FIELDS)

        assert thing.count == 0
        assert thing.label == ""
        assert thing.items == []

    def test_null_clears_only_nullable_fields(self) -> None:
        thing = _Thing()
        merge(thing, {"label": "a", "note_text": "n"}, _FIELDS)

        merge(thing, {"label": None, "note_text": None}, _FIELDS)

        assert thing.label == "a"
        assert thing.note is None

    def test_nested_object_is_replaced_wholesale(self) -> None:
        thing = _Thing()
        merge(thing, {"meta": {"l": "x", "r": "y"}}, _FIELDS)

        merge(thing, {"meta": {"l": "z"}}, _FIELDS)
        assert (thing.left, thing.right) == ("z", None)

        merge(thing, {"meta": {}}, _FIELDS)
        assert (thing.left, thing.right) == (None, None)

    def test_nested_non_object_is_ignored(self) -> None:
        thing = _Thing()
        merge(thing, {"meta": {"l": "x", "r": "y"}}, _FIELDS)

        merge(thing, {"meta": None}, _FIELDS)
        merge(thing, {"meta": ["l"]}, _FIELDS)

        assert (thing.left, thing.right) == ("x", "y")

    def test_list_field_maps_every_element_and_replaces_list(self) -> None:
        thing = _Thing()
        merge(thing, {"items": ["a", "b"]}, _FIELDS)
        first = thing.items

        merge(thing, {"items": ["c"]}, _FIELDS)

        assert first == ["A", "B"]
        assert thing.items == ["C"]
        assert thing.items is not first

    def test_list_field_ignores_non_list(self) -> None:
        thing = _Thing()
        merge(thing, {"items": ["a"]}, _FIELDS)

        merge(thing, {"items": "b"}, _FIELDS)

        assert thing.items == ["A"]

    def test_merge_is_idempotent(self) -> None:
        payload = {"count": 3, "label": "a", "meta": {"l": "x"}, "items": ["q"], "when": "2024-01-01T00:00:00Z"}
        once = _Thing()
        twice = _Thing()

        merge(once, payload, _FIELDS)
        merge(twice, payload, _FIELDS)
        merge(twice, payload, _FIELDS)

        assert vars(once) == vars(twice)

    def test_last_writer_wins(self) -> None:
        thing = _Thing()
        merge(thing, {"label": "first"}, _FIELDS)
        merge(thing, {"label": "second"}, _FIELDS)
        assert thing.label == "second"

    def test_returns_previous_values_of_assigned_attributes(self) -> None:
        thing = _Thing()
        merge(thing, {"count": 1, "label": "a"}, _FIELDS)

        old = merge(thing, {"count": 2, "meta": {"l": "x"}}, _FIELDS)

        assert old == {"count": 1, "left": None, "right": None}

    def test_malformed_timestamp_leaves_entity_unchanged(self) -> None:
        thing = _Thing()
        merge(thing, {"count": 1, "label": "a"}, _FIELDS)

        with pytest.raises(DiscoTimestampError):
            merge(thing, {"count": 2, "label": "b", "when": "yesterday-ish"}, _FIELDS)

        assert thing.count == 1
        assert thing.label == "a"
        assert thing.when is None


def _client() -> DiscoClient:
    return DiscoClient(DiscoConfig(token="token"))


_EVENT_PAYLOAD: dict = {
    "id": "100",
    "guild_id": "9",
    "channel_id": "3",
    "creator_id": "5",
    "name": "Launch party",
    "description": "Bring snacks",
    "scheduled_start_time": "2026-11-01T18:00:00+00:00",
    "scheduled_end_time": "2026-11-01T20:00:00+00:00",
    "privacy_level": 2,
    "status": 1,
    "entity_type": 2,
    "entity_id": None,
    "entity_metadata": None,
    "user_count": 4,
    "image": "cafebabe",
}


class TestScheduledEventMerge:
    def test_status_only_update_changes_only_status(self) -> None:
        event = GuildScheduledEvent(_EVENT_PAYLOAD, _client())

        old = event.update({"status": 2})

        assert old == {"status": ScheduledEventStatus.SCHEDULED}
        assert event.status == ScheduledEventStatus.ACTIVE
        assert event.name == "Launch party"
        assert event.description == "Bring snacks"
        assert event.scheduled_start_time == datetime(2026, 11, 1, 18, 0, tzinfo=UTC)
        assert event.scheduled_end_time == datetime(2026, 11, 1, 20, 0, tzinfo=UTC)
        assert event.user_count == 4
        assert event.image == "cafebabe"

    def test_nullable_fields_can_be_cleared(self) -> None:
        event = GuildScheduledEvent(_EVENT_PAYLOAD, _client())

        event.update({"scheduled_end_time": None, "description": None, "image": None, "channel_id": None})

        assert event.scheduled_end_time is None
        assert event.description is None
        assert event.image is None
        assert event.channel_id is None

    def test_null_name_is_ignored(self) -> None:
        event = GuildScheduledEvent(_EVENT_PAYLOAD, _client())
        event.update({"name": None})
        assert event.name == "Launch party"

    def test_entity_metadata_sets_and_clears_location(self) -> None:
        event = GuildScheduledEvent(_EVENT_PAYLOAD, _client())
        assert event.location is None

        event.update({"entity_type": 3, "entity_metadata": {"location": "Main hall"}})
        assert event.location == "Main hall"

        event.update({"entity_metadata": {}})
        assert event.location is None

    def test_malformed_start_time_rejects_whole_update(self) -> None:
        event = GuildScheduledEvent(_EVENT_PAYLOAD, _client())

        with pytest.raises(DiscoTimestampError):
            event.update({"name": "Renamed", "scheduled_start_time": "not a time"})

        assert event.name == "Launch party"
        assert event.scheduled_start_time == datetime(2026, 11, 1, 18, 0, tzinfo=UTC)

    def test_malformed_timestamp_fails_construction(self) -> None:
        with pytest.raises(DiscoTimestampError):
            GuildScheduledEvent({**_EVENT_PAYLOAD, "scheduled_start_time": 12}, _client())


class TestAutomodRuleMerge:
    def test_empty_trigger_metadata_clears_derived_fields(self) -> None:
        rule = AutomodRule(
            {
                "id": "1",
                "guild_id": "9",
                "trigger_metadata": {"keyword_filter": ["a"], "allow_list": ["b"], "presets": [1]},
            },
            _client(),
        )

        rule.update({"trigger_metadata": {}})

        assert rule.keyword_filter is None
        assert rule.allow_list is None
        assert rule.presets is None

    def test_actions_are_replaced_atomically(self) -> None:
        rule = AutomodRule(
            {
                "id": "1",
                "guild_id": "9",
                "actions": [{"type": 1}, {"type": 3, "metadata": {"duration_seconds": 60}}],
            },
            _client(),
        )

        rule.update({"actions": [{"type": 2, "metadata": {"channel_id": "7"}}]})

        assert rule.actions == [AutomodAction(type=AutomodActionType.SEND_ALERT_MESSAGE, channel_id="7")]

    def test_enabled_false_is_applied(self) -> None:
        rule = AutomodRule({"id": "1", "guild_id": "9", "enabled": True}, _client())
        rule.update({"enabled": False})
        assert rule.enabled is False
