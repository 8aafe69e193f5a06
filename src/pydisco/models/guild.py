"""Guild model."""

from __future__ import annotations

import functools
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydisco._constants import GUILD_ICON
from pydisco.models._base import Base
from pydisco.models.automod import AutomodRule
from pydisco.models.scheduled_event import GuildScheduledEvent
from pydisco.state.merge import FieldSpec
from pydisco.state.store import EntityCollection

if TYPE_CHECKING:
    from pydisco.client import DiscoClient


class Guild(Base):
    """A guild and the per-guild entity collections it owns.

    Only the handful of fields this library reads are merged; the rest of
    a guild payload is ignored.
    """

    _FIELDS = (
        FieldSpec("name", "name"),
        FieldSpec("icon", "icon", nullable=True),
        FieldSpec("owner_id", "owner_id"),
        FieldSpec("unavailable", "unavailable", bool),
    )

    name: str | None = None
    icon: str | None = None
    owner_id: str | None = None
    unavailable: bool = False

    def __init__(self, data: Mapping[str, Any], client: DiscoClient) -> None:
        super().__init__(data.get("id"))
        self._client = client
        self.scheduled_events: EntityCollection[GuildScheduledEvent] = EntityCollection(
            functools.partial(GuildScheduledEvent, client=client)
        )
        self.automod_rules: EntityCollection[AutomodRule] = EntityCollection(
            functools.partial(AutomodRule, client=client)
        )
        self.update(data)

    @property
    def icon_url(self) -> str | None:
        return self.dynamic_icon_url()

    def dynamic_icon_url(self, fmt: str | None = None, size: int | None = None) -> str | None:
        if not self.icon:
            return None
        return self._client.format_image(GUILD_ICON.format(guild_id=self.id, icon=self.icon), fmt, size)
