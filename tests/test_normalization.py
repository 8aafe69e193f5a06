from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from pydisco._constants import format_image_url
from pydisco.exceptions import DiscoTimestampError
from pydisco.ingestion.normalize import parse_iso_timestamp, to_enum, to_str_list
from pydisco.models.scheduled_event import ScheduledEventStatus


def test_parse_iso_timestamp_zulu() -> None:
    assert parse_iso_timestamp("2026-11-01T18:00:00.123000Z") == datetime(2026, 11, 1, 18, 0, 0, 123000, tzinfo=UTC)


def test_parse_iso_timestamp_converts_offsets_to_utc() -> None:
    parsed = parse_iso_timestamp("2026-11-01T20:00:00+02:00")
    assert parsed == datetime(2026, 11, 1, 18, 0, tzinfo=UTC)
    assert parsed is not None and parsed.utcoffset() == timedelta(0)


def test_parse_iso_timestamp_assumes_utc_for_naive_values() -> None:
    assert parse_iso_timestamp("2026-11-01T18:00:00") == datetime(2026, 11, 1, 18, 0, tzinfo=UTC)


def test_parse_iso_timestamp_passes_datetimes_and_none() -> None:
    aware = datetime(2026, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=1)))
    assert parse_iso_timestamp(aware) == datetime(2026, 1, 1, 0, 0, tzinfo=UTC)
    assert parse_iso_timestamp(None) is None


@pytest.mark.parametrize("value", ["", "tomorrow", "2026-13-01T00:00:00Z", 1700000000, ["2026-01-01"]])
def test_parse_iso_timestamp_rejects_malformed(value: object) -> None:
    with pytest.raises(DiscoTimestampError) as exc_info:
        parse_iso_timestamp(value)
    assert exc_info.value.value == value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (2, ScheduledEventStatus.ACTIVE),
        ("3", ScheduledEventStatus.COMPLETED),
        (99, ScheduledEventStatus.UNKNOWN),
        ("x", ScheduledEventStatus.UNKNOWN),
        (True, ScheduledEventStatus.UNKNOWN),
        (2.0, ScheduledEventStatus.ACTIVE),
        (1.9, ScheduledEventStatus.UNKNOWN),
        (float("inf"), ScheduledEventStatus.UNKNOWN),
        (None, None),
    ],
)
def test_to_enum(raw: object, expected: ScheduledEventStatus | None) -> None:
    assert to_enum(ScheduledEventStatus, raw) == expected


def test_to_str_list() -> None:
    assert to_str_list([1, "2"]) == ["1", "2"]
    assert to_str_list("12") == []


class TestFormatImageUrl:
    def test_valid_format_and_size(self) -> None:
        url = format_image_url("https://cdn", "/x/y", fmt="PNG", size=512)
        assert url == "https://cdn/x/y.png?size=512"

    def test_defaults_when_missing(self) -> None:
        url = format_image_url("https://cdn", "/x/y", default_format="webp", default_size=128)
        assert url == "https://cdn/x/y.webp?size=128"

    def test_animated_hash_falls_back_to_gif(self) -> None:
        assert format_image_url("https://cdn", "/x/a_y", fmt="tiff") == "https://cdn/x/a_y.gif?size=4096"

    @pytest.mark.parametrize("size", [0, 8, 100, 8192])
    def test_invalid_sizes_fall_back(self, size: int) -> None:
        assert format_image_url("https://cdn", "/x/y", size=size) == "https://cdn/x/y.jpg?size=4096"
