"""Gateway dispatch ingestion.

Routes :class:`~pydisco.state.events.DispatchEvent` envelopes to the
entity collections: creates build (or merge) entities, updates re-enter
the merge engine, deletes drop them. Entities are cached under their guild
when the guild is cached; otherwise they are built standalone and only
handed to the ``on_dispatch`` callback.

Callback names and arguments:

* ``guild_create`` ``(guild,)``, ``guild_update`` ``(guild, old)``,
  ``guild_delete`` ``(guild_or_stand_in,)``
* ``automod_rule_create`` ``(rule,)``, ``automod_rule_update``
  ``(rule, old)``, ``automod_rule_delete`` ``(rule,)``
* ``guild_scheduled_event_create`` ``(event,)``,
  ``guild_scheduled_event_update`` ``(event, old)``,
  ``guild_scheduled_event_delete`` ``(event,)``
* ``guild_scheduled_event_user_add`` / ``_remove`` ``(event, user)``

``old`` is the dict of previous attribute values returned by the merge, or
``None`` when the entity was not cached before the update.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydisco.models.automod import AutomodRule
from pydisco.models.scheduled_event import GuildScheduledEvent
from pydisco.state.events import DispatchEvent, DispatchName
from pydisco.state.resolve import PartialEntity, resolve
from pydisco.state.store import EntityCollection

if TYPE_CHECKING:
    from pydisco.client import DiscoClient
    from pydisco.models.guild import Guild

_logger = logging.getLogger(__name__)

_Handler = Callable[["DiscoClient", dict[str, Any]], None]


def _cached_guild(client: DiscoClient, data: Mapping[str, Any]) -> Guild | None:
    return client.guilds.get(str(data.get("guild_id")))


def _upsert(
    collection: EntityCollection[Any] | None,
    data: dict[str, Any],
    build: Callable[[], Any],
) -> tuple[Any, dict[str, Any] | None]:
    """Merge into the cached entity, insert a new one, or build standalone."""
    if collection is None:
        return build(), None
    existing = collection.get(str(data.get("id")))
    if existing is None:
        return collection.add(data), None
    return existing, existing.update(data)


# ------------------------------------------------------------------
# Guilds
# ------------------------------------------------------------------


def _guild_create(client: DiscoClient, data: dict[str, Any]) -> None:
    guild = client.guilds.update(data)
    events = data.get("guild_scheduled_events")
    if isinstance(events, list):
        for item in events:
            if isinstance(item, dict):
                guild.scheduled_events.update({"guild_id": guild.id, **item})
    client._emit("guild_create", guild)


def _guild_update(client: DiscoClient, data: dict[str, Any]) -> None:
    old: dict[str, Any] | None = None
    guild = client.guilds.get(str(data.get("id")))
    if guild is None:
        guild = client.guilds.add(data)
    else:
        old = guild.update(data)
    client._emit("guild_update", guild, old)


def _guild_delete(client: DiscoClient, data: dict[str, Any]) -> None:
    if data.get("unavailable") is True:
        guild = client.guilds.get(str(data.get("id")))
        if guild is not None:
            guild.update({"unavailable": True})
            client._emit("guild_delete", guild)
            return
    removed = client.guilds.remove(data.get("id"))
    client._emit("guild_delete", removed if removed is not None else PartialEntity(id=data.get("id")))


# ------------------------------------------------------------------
# Auto-moderation rules
# ------------------------------------------------------------------


def _automod_collection(client: DiscoClient, data: Mapping[str, Any]) -> EntityCollection[AutomodRule] | None:
    guild = _cached_guild(client, data)
    return guild.automod_rules if guild is not None else None


def _automod_rule_create(client: DiscoClient, data: dict[str, Any]) -> None:
    rule, _ = _upsert(_automod_collection(client, data), data, lambda: AutomodRule(data, client))
    client._emit("automod_rule_create", rule)


def _automod_rule_update(client: DiscoClient, data: dict[str, Any]) -> None:
    rule, old = _upsert(_automod_collection(client, data), data, lambda: AutomodRule(data, client))
    client._emit("automod_rule_update", rule, old)


def _automod_rule_delete(client: DiscoClient, data: dict[str, Any]) -> None:
    collection = _automod_collection(client, data)
    rule = collection.remove(data.get("id")) if collection is not None else None
    if rule is None:
        rule = AutomodRule(data, client)
    client._emit("automod_rule_delete", rule)


# ------------------------------------------------------------------
# Scheduled events
# ------------------------------------------------------------------


def _event_collection(
    client: DiscoClient, data: Mapping[str, Any]
) -> EntityCollection[GuildScheduledEvent] | None:
    guild = _cached_guild(client, data)
    return guild.scheduled_events if guild is not None else None


def _scheduled_event_create(client: DiscoClient, data: dict[str, Any]) -> None:
    event, _ = _upsert(_event_collection(client, data), data, lambda: GuildScheduledEvent(data, client))
    client._emit("guild_scheduled_event_create", event)


def _scheduled_event_update(client: DiscoClient, data: dict[str, Any]) -> None:
    event, old = _upsert(_event_collection(client, data), data, lambda: GuildScheduledEvent(data, client))
    client._emit("guild_scheduled_event_update", event, old)


def _scheduled_event_delete(client: DiscoClient, data: dict[str, Any]) -> None:
    collection = _event_collection(client, data)
    event = collection.remove(data.get("id")) if collection is not None else None
    if event is None:
        event = GuildScheduledEvent(data, client)
    client._emit("guild_scheduled_event_delete", event)


def _scheduled_event_user_delta(client: DiscoClient, data: dict[str, Any], delta: int, name: str) -> None:
    event_id = data.get("guild_scheduled_event_id")
    collection = _event_collection(client, data)
    event: GuildScheduledEvent | PartialEntity | None = None
    if collection is not None:
        event = collection.get(str(event_id))
    if isinstance(event, GuildScheduledEvent):
        if event.user_count is not None:
            event.update({"user_count": max(0, event.user_count + delta)})
    else:
        event = PartialEntity(id=event_id)
    client._emit(name, event, resolve(client.users, data.get("user_id")))


def _scheduled_event_user_add(client: DiscoClient, data: dict[str, Any]) -> None:
    _scheduled_event_user_delta(client, data, 1, "guild_scheduled_event_user_add")


def _scheduled_event_user_remove(client: DiscoClient, data: dict[str, Any]) -> None:
    _scheduled_event_user_delta(client, data, -1, "guild_scheduled_event_user_remove")


_HANDLERS: dict[str, _Handler] = {
    DispatchName.GUILD_CREATE: _guild_create,
    DispatchName.GUILD_UPDATE: _guild_update,
    DispatchName.GUILD_DELETE: _guild_delete,
    DispatchName.AUTO_MODERATION_RULE_CREATE: _automod_rule_create,
    DispatchName.AUTO_MODERATION_RULE_UPDATE: _automod_rule_update,
    DispatchName.AUTO_MODERATION_RULE_DELETE: _automod_rule_delete,
    DispatchName.GUILD_SCHEDULED_EVENT_CREATE: _scheduled_event_create,
    DispatchName.GUILD_SCHEDULED_EVENT_UPDATE: _scheduled_event_update,
    DispatchName.GUILD_SCHEDULED_EVENT_DELETE: _scheduled_event_delete,
    DispatchName.GUILD_SCHEDULED_EVENT_USER_ADD: _scheduled_event_user_add,
    DispatchName.GUILD_SCHEDULED_EVENT_USER_REMOVE: _scheduled_event_user_remove,
}


def apply_dispatch(client: DiscoClient, event: DispatchEvent) -> bool:
    """Apply *event* to the client cache; ``False`` when it is not handled."""
    handler = _HANDLERS.get(event.name)
    if handler is None:
        _logger.debug("Ignoring unhandled dispatch %s", event.name)
        return False
    _logger.debug("Applying dispatch %s id=%s", event.name, event.data.get("id"))
    handler(client, event.data)
    return True
