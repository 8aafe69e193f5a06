from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pydisco.client import DiscoClient
from pydisco.config import DiscoConfig
from pydisco.exceptions import DiscoInvalidIdentifierError
from pydisco.models._base import Base, parse_snowflake, snowflake_time
from pydisco.models.automod import AutomodRule
from pydisco.models.scheduled_event import GuildScheduledEvent


def _client() -> DiscoClient:
    return DiscoClient(DiscoConfig(token="token"))


class TestParseSnowflake:
    def test_decimal_string(self) -> None:
        assert parse_snowflake("175928847299117063") == 175928847299117063

    def test_int(self) -> None:
        assert parse_snowflake(42) == 42

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "-1", "+5", " 12", "1.5", 1.5, True, -1, 1 << 64, "١٢٣", "1" * 21, "9" * 5000],
    )
    def test_invalid_values_raise(self, value: object) -> None:
        with pytest.raises(DiscoInvalidIdentifierError) as exc_info:
            parse_snowflake(value)
        assert exc_info.value.value == value


def test_snowflake_time_decodes_creation_instant() -> None:
    # Example id from the public API documentation.
    assert snowflake_time("175928847299117063") == datetime(2016, 4, 30, 11, 18, 25, 796000, tzinfo=UTC)


def test_snowflake_time_of_zero_is_epoch() -> None:
    assert snowflake_time(0) == datetime(2015, 1, 1, tzinfo=UTC)


def test_base_keeps_identifier_unchanged() -> None:
    as_str = Base("175928847299117063")
    as_int = Base(175928847299117063)

    assert as_str.id == "175928847299117063"
    assert as_int.id == 175928847299117063
    assert as_str.created_at == as_int.created_at


def test_base_id_is_read_only() -> None:
    entity = Base("1")
    with pytest.raises(AttributeError):
        entity.id = "2"  # type: ignore[misc]


def test_entity_with_invalid_id_fails_construction() -> None:
    client = _client()
    with pytest.raises(DiscoInvalidIdentifierError):
        AutomodRule({"id": "not-a-snowflake", "guild_id": "9"}, client)


def test_entity_with_invalid_guild_id_fails_construction() -> None:
    client = _client()
    with pytest.raises(DiscoInvalidIdentifierError):
        GuildScheduledEvent({"id": "1", "name": "x"}, client)


def test_oversized_guild_id_in_dispatch_is_rejected() -> None:
    client = _client()
    with pytest.raises(DiscoInvalidIdentifierError):
        client.handle_dispatch("AUTO_MODERATION_RULE_CREATE", {"id": "1", "guild_id": "9" * 5000})
