"""Auto-moderation rule model."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from pydisco.ingestion.normalize import to_enum, to_str_list
from pydisco.models._base import Base, DiscoEnum, parse_snowflake
from pydisco.state.merge import FieldSpec, ListFieldSpec, NestedFieldSpec
from pydisco.state.resolve import PartialEntity, resolve

if TYPE_CHECKING:
    from pydisco.client import DiscoClient
    from pydisco.models.guild import Guild
    from pydisco.models.requests import AutomodRuleOptions
    from pydisco.models.user import User


class AutomodEventType(DiscoEnum):
    UNKNOWN = -1
    MESSAGE_SEND = 1
    MEMBER_UPDATE = 2


class AutomodTriggerType(DiscoEnum):
    UNKNOWN = -1
    KEYWORD = 1
    SPAM = 3
    KEYWORD_PRESET = 4
    MENTION_SPAM = 5
    MEMBER_PROFILE = 6


class AutomodActionType(DiscoEnum):
    UNKNOWN = -1
    BLOCK_MESSAGE = 1
    SEND_ALERT_MESSAGE = 2
    TIMEOUT = 3
    BLOCK_MEMBER_INTERACTION = 4


class AutomodAction(BaseModel):
    """One action a rule performs, with its metadata flattened."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: AutomodActionType
    channel_id: str | None = None
    """Alert channel (``SEND_ALERT_MESSAGE``)."""
    duration_seconds: int | None = None
    """Timeout length (``TIMEOUT``)."""
    custom_message: str | None = None
    """Message shown to the member (``BLOCK_MESSAGE``)."""

    @classmethod
    def from_api(cls, raw: Any) -> AutomodAction:
        """Flatten a wire action; metadata is read only when it is an object."""
        if not isinstance(raw, Mapping):
            return cls(type=AutomodActionType.UNKNOWN)
        action_type = to_enum(AutomodActionType, raw.get("type"))
        fields: dict[str, Any] = {"type": AutomodActionType.UNKNOWN if action_type is None else action_type}
        metadata = raw.get("metadata")
        if isinstance(metadata, Mapping):
            fields["channel_id"] = metadata.get("channel_id")
            fields["duration_seconds"] = metadata.get("duration_seconds")
            fields["custom_message"] = metadata.get("custom_message")
        return cls(**fields)

    def to_payload(self) -> dict[str, Any]:
        """Wire shape used when creating or editing a rule."""
        metadata: dict[str, Any] = {}
        if self.channel_id is not None:
            metadata["channel_id"] = self.channel_id
        if self.duration_seconds is not None:
            metadata["duration_seconds"] = self.duration_seconds
        if self.custom_message is not None:
            metadata["custom_message"] = self.custom_message
        payload: dict[str, Any] = {"type": int(self.type)}
        if metadata:
            payload["metadata"] = metadata
        return payload


class AutomodRule(Base):
    """An auto-moderation rule of a guild.

    ``guild`` is the cached :class:`~pydisco.models.guild.Guild` when it was
    cached at construction time, otherwise a
    :class:`~pydisco.state.resolve.PartialEntity` carrying only the id.
    """

    _FIELDS = (
        FieldSpec("name", "name"),
        FieldSpec("event_type", "event_type", functools.partial(to_enum, AutomodEventType)),
        FieldSpec("trigger_type", "trigger_type", functools.partial(to_enum, AutomodTriggerType)),
        NestedFieldSpec(
            "trigger_metadata",
            {
                "keyword_filter": "keyword_filter",
                "regex_patterns": "regex_patterns",
                "presets": "presets",
                "allow_list": "allow_list",
                "mention_total_limit": "mention_total_limit",
            },
        ),
        ListFieldSpec("actions", "actions", AutomodAction.from_api),
        FieldSpec("enabled", "enabled", bool),
        FieldSpec("exempt_roles", "exempt_roles", to_str_list),
        FieldSpec("exempt_channels", "exempt_channels", to_str_list),
    )

    name: str | None = None
    event_type: AutomodEventType | None = None
    trigger_type: AutomodTriggerType | None = None
    keyword_filter: list[str] | None = None
    regex_patterns: list[str] | None = None
    presets: list[int] | None = None
    allow_list: list[str] | None = None
    mention_total_limit: int | None = None
    actions: list[AutomodAction] | None = None
    enabled: bool | None = None
    exempt_roles: list[str] | None = None
    exempt_channels: list[str] | None = None

    def __init__(self, data: Mapping[str, Any], client: DiscoClient) -> None:
        super().__init__(data.get("id"))
        self._client = client
        parse_snowflake(data.get("guild_id"))
        self.guild: Guild | PartialEntity = resolve(client.guilds, data["guild_id"])
        self.creator_id: str | None = data.get("creator_id")
        self.creator: User | PartialEntity | None = (
            resolve(client.users, self.creator_id) if self.creator_id is not None else None
        )
        self.update(data)

    def delete(self, *, reason: str | None = None) -> Awaitable[None]:
        """Delete the rule."""
        return self._client.delete_automod_rule(self.guild.id, self.id, reason=reason)

    def edit(
        self,
        options: AutomodRuleOptions | Mapping[str, Any],
        *,
        reason: str | None = None,
    ) -> Awaitable[AutomodRule]:
        """Edit the rule; resolves to the rule as returned by the API."""
        return self._client.edit_automod_rule(self.guild.id, self.id, options, reason=reason)

    def __repr__(self) -> str:
        return f"<AutomodRule id={self.id!r} name={self.name!r} guild={self.guild.id!r}>"
