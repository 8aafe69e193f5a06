"""Guild scheduled event model."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydisco._constants import GUILD_SCHEDULED_EVENT_COVER
from pydisco.ingestion.normalize import parse_iso_timestamp, to_enum
from pydisco.models._base import Base, DiscoEnum, parse_snowflake
from pydisco.models.user import User
from pydisco.state.merge import FieldSpec, NestedFieldSpec
from pydisco.state.resolve import PartialEntity, resolve

if TYPE_CHECKING:
    from pydisco.client import DiscoClient
    from pydisco.models.guild import Guild
    from pydisco.models.requests import ScheduledEventOptions


class ScheduledEventPrivacyLevel(DiscoEnum):
    UNKNOWN = -1
    GUILD_ONLY = 2


class ScheduledEventStatus(DiscoEnum):
    UNKNOWN = -1
    SCHEDULED = 1
    ACTIVE = 2
    COMPLETED = 3
    CANCELED = 4


class ScheduledEventEntityType(DiscoEnum):
    UNKNOWN = -1
    STAGE_INSTANCE = 1
    VOICE = 2
    EXTERNAL = 3


class GuildScheduledEvent(Base):
    """A scheduled event of a guild.

    ``guild`` follows the same rule as :class:`~pydisco.models.automod.AutomodRule`:
    live object when cached at construction time, otherwise a stand-in.
    ``creator`` is the cached user when known, a :class:`User` built from an
    embedded ``creator`` object, a stand-in for a bare ``creator_id``, or
    ``None`` when the event has no creator.
    """

    _FIELDS = (
        FieldSpec("channel_id", "channel_id", nullable=True),
        FieldSpec("name", "name"),
        FieldSpec("description", "description", nullable=True),
        FieldSpec("scheduled_start_time", "scheduled_start_time", parse_iso_timestamp),
        FieldSpec("scheduled_end_time", "scheduled_end_time", parse_iso_timestamp, nullable=True),
        FieldSpec("privacy_level", "privacy_level", functools.partial(to_enum, ScheduledEventPrivacyLevel)),
        FieldSpec("status", "status", functools.partial(to_enum, ScheduledEventStatus)),
        FieldSpec("entity_type", "entity_type", functools.partial(to_enum, ScheduledEventEntityType)),
        FieldSpec("entity_id", "entity_id", nullable=True),
        NestedFieldSpec("entity_metadata", {"location": "location"}),
        FieldSpec("user_count", "user_count", int),
        FieldSpec("image", "image", nullable=True),
    )

    channel_id: str | None = None
    name: str | None = None
    description: str | None = None
    scheduled_start_time: datetime | None = None
    scheduled_end_time: datetime | None = None
    privacy_level: ScheduledEventPrivacyLevel | None = None
    status: ScheduledEventStatus | None = None
    entity_type: ScheduledEventEntityType | None = None
    entity_id: str | None = None
    location: str | None = None
    user_count: int | None = None
    image: str | None = None

    def __init__(self, data: Mapping[str, Any], client: DiscoClient) -> None:
        super().__init__(data.get("id"))
        self._client = client
        parse_snowflake(data.get("guild_id"))
        self.guild: Guild | PartialEntity = resolve(client.guilds, data["guild_id"])

        self.creator: User | PartialEntity | None = None
        self.creator_id: str | None = None
        creator = data.get("creator")
        if isinstance(creator, Mapping):
            self.creator = User.from_payload(creator, client)
            self.creator_id = self.creator.id
        elif data.get("creator_id") is not None:
            self.creator_id = data["creator_id"]
            self.creator = resolve(client.users, self.creator_id)

        self.update(data)

    def delete(self) -> Awaitable[None]:
        """Delete the scheduled event."""
        return self._client.delete_guild_scheduled_event(self.guild.id, self.id)

    def edit(
        self,
        options: ScheduledEventOptions | Mapping[str, Any],
        *,
        reason: str | None = None,
    ) -> Awaitable[GuildScheduledEvent]:
        """Edit the event; resolves to the event as returned by the API.

        A ``"reason"`` key in a mapping *options* is used as the audit log
        reason when *reason* is not given.
        """
        if isinstance(options, Mapping) and "reason" in options:
            options = dict(options)
            carried = options.pop("reason")
            if reason is None:
                reason = carried
        return self._client.edit_guild_scheduled_event(self.guild.id, self.id, options, reason=reason)

    def get_users(
        self,
        *,
        limit: int | None = None,
        before: str | None = None,
        after: str | None = None,
    ) -> Awaitable[list[ScheduledEventUser]]:
        """List users subscribed to the event (up to 100 per call)."""
        return self._client.get_guild_scheduled_event_users(
            self.guild.id,
            self.id,
            limit=limit,
            before=before,
            after=after,
        )

    @property
    def image_url(self) -> str | None:
        return self.dynamic_image_url()

    def dynamic_image_url(self, fmt: str | None = None, size: int | None = None) -> str | None:
        """Cover image URL in the requested format/size, ``None`` without a cover."""
        if not self.image:
            return None
        return self._client.format_image(
            GUILD_SCHEDULED_EVENT_COVER.format(event_id=self.id, image=self.image),
            fmt,
            size,
        )

    def __repr__(self) -> str:
        return f"<GuildScheduledEvent id={self.id!r} name={self.name!r} status={self.status!r}>"


@dataclass(frozen=True, slots=True)
class ScheduledEventUser:
    """One subscriber returned by the event users endpoint."""

    event_id: str
    user: User
    member: dict[str, Any] | None = field(default=None)
    """Raw guild member object, present when requested with ``with_member``."""
