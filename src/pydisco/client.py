"""High-level async client for the REST API and the local entity cache."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp

from pydisco._api import automod as _automod_api
from pydisco._api import scheduled_events as _events_api
from pydisco._constants import format_image_url
from pydisco._transport import RestTransport, Transport
from pydisco.config import DiscoConfig
from pydisco.exceptions import DiscoError
from pydisco.ingestion.dispatch import apply_dispatch
from pydisco.models.automod import AutomodRule
from pydisco.models.guild import Guild
from pydisco.models.requests import AutomodRuleOptions, ScheduledEventOptions, ScheduledEventUsersRequest
from pydisco.models.scheduled_event import GuildScheduledEvent, ScheduledEventUser
from pydisco.models.user import User
from pydisco.state.events import DispatchEvent
from pydisco.state.store import EntityCollection

_logger = logging.getLogger(__name__)


def _with_guild_id(data: Mapping[str, Any], guild_id: str) -> dict[str, Any]:
    """Fill in ``guild_id`` for payloads fetched under a guild route."""
    return {"guild_id": guild_id, **data}


class DiscoClient:
    """Async client owning the transport and the global entity cache.

    Usage::

        async with DiscoClient(config) as client:
            rules = await client.get_automod_rules(guild_id)
            await rules[0].edit({"enabled": False})

    Entities built by this client keep a reference to it and route their
    ``delete``/``edit``/... calls back through it. REST results are returned
    as fresh entities; the cache is only written by :meth:`handle_dispatch`.
    """

    def __init__(
        self,
        config: DiscoConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_dispatch: Callable[[str, tuple[Any, ...]], None] | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport
        self._on_dispatch = on_dispatch
        self.guilds: EntityCollection[Guild] = EntityCollection(functools.partial(Guild, client=self))
        self.users: EntityCollection[User] = EntityCollection(functools.partial(User, client=self))

    @property
    def config(self) -> DiscoConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DiscoClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = RestTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise DiscoError("Client not initialized. Use 'async with DiscoClient(...) as client:'")
        return self._transport

    def _emit(self, name: str, *args: Any) -> None:
        if self._on_dispatch is None:
            return
        try:
            self._on_dispatch(name, args)
        except Exception:
            _logger.debug("on_dispatch callback failed for %s", name, exc_info=True)

    @staticmethod
    def _automod_options(options: AutomodRuleOptions | Mapping[str, Any]) -> AutomodRuleOptions:
        if isinstance(options, AutomodRuleOptions):
            return options
        return AutomodRuleOptions.model_validate(dict(options))

    @staticmethod
    def _event_options(options: ScheduledEventOptions | Mapping[str, Any]) -> ScheduledEventOptions:
        if isinstance(options, ScheduledEventOptions):
            return options
        return ScheduledEventOptions.model_validate(dict(options))

    # ------------------------------------------------------------------
    # Cache ingestion
    # ------------------------------------------------------------------

    def handle_dispatch(self, name: str, data: Mapping[str, Any]) -> bool:
        """Apply one gateway dispatch to the cache.

        Returns ``False`` for dispatch types this client does not handle.
        Identifier and timestamp errors propagate to the caller.
        """
        event = DispatchEvent(name=name, data=dict(data))
        return apply_dispatch(self, event)

    def format_image(self, path: str, fmt: str | None = None, size: int | None = None) -> str:
        """CDN URL for an image path using the configured defaults."""
        return format_image_url(
            self._config.cdn_url,
            path,
            fmt=fmt,
            size=size,
            default_format=self._config.default_image_format,
            default_size=self._config.default_image_size,
        )

    # ------------------------------------------------------------------
    # Auto-moderation rules
    # ------------------------------------------------------------------

    async def get_automod_rules(self, guild_id: str) -> list[AutomodRule]:
        """Fetch all auto-moderation rules of a guild."""
        transport = self._require_transport()
        items = await _automod_api.fetch_automod_rules(transport, guild_id)
        return [AutomodRule(_with_guild_id(item, guild_id), self) for item in items]

    async def get_automod_rule(self, guild_id: str, rule_id: str) -> AutomodRule:
        """Fetch one auto-moderation rule."""
        transport = self._require_transport()
        item = await _automod_api.fetch_automod_rule(transport, guild_id, rule_id)
        return AutomodRule(_with_guild_id(item, guild_id), self)

    async def create_automod_rule(
        self,
        guild_id: str,
        options: AutomodRuleOptions | Mapping[str, Any],
        *,
        reason: str | None = None,
    ) -> AutomodRule:
        """Create an auto-moderation rule."""
        transport = self._require_transport()
        item = await _automod_api.create_automod_rule(
            transport, guild_id, self._automod_options(options), reason=reason
        )
        return AutomodRule(_with_guild_id(item, guild_id), self)

    async def edit_automod_rule(
        self,
        guild_id: str,
        rule_id: str,
        options: AutomodRuleOptions | Mapping[str, Any],
        *,
        reason: str | None = None,
    ) -> AutomodRule:
        """Edit an auto-moderation rule."""
        transport = self._require_transport()
        item = await _automod_api.edit_automod_rule(
            transport, guild_id, rule_id, self._automod_options(options), reason=reason
        )
        return AutomodRule(_with_guild_id(item, guild_id), self)

    async def delete_automod_rule(self, guild_id: str, rule_id: str, *, reason: str | None = None) -> None:
        """Delete an auto-moderation rule."""
        transport = self._require_transport()
        await _automod_api.delete_automod_rule(transport, guild_id, rule_id, reason=reason)

    # ------------------------------------------------------------------
    # Scheduled events
    # ------------------------------------------------------------------

    async def get_guild_scheduled_events(
        self,
        guild_id: str,
        *,
        with_user_count: bool = False,
    ) -> list[GuildScheduledEvent]:
        """Fetch all scheduled events of a guild."""
        transport = self._require_transport()
        items = await _events_api.fetch_scheduled_events(transport, guild_id, with_user_count=with_user_count)
        return [GuildScheduledEvent(_with_guild_id(item, guild_id), self) for item in items]

    async def get_guild_scheduled_event(
        self,
        guild_id: str,
        event_id: str,
        *,
        with_user_count: bool = False,
    ) -> GuildScheduledEvent:
        """Fetch one scheduled event."""
        transport = self._require_transport()
        item = await _events_api.fetch_scheduled_event(
            transport, guild_id, event_id, with_user_count=with_user_count
        )
        return GuildScheduledEvent(_with_guild_id(item, guild_id), self)

    async def create_guild_scheduled_event(
        self,
        guild_id: str,
        options: ScheduledEventOptions | Mapping[str, Any],
        *,
        reason: str | None = None,
    ) -> GuildScheduledEvent:
        """Create a scheduled event."""
        transport = self._require_transport()
        item = await _events_api.create_scheduled_event(
            transport, guild_id, self._event_options(options), reason=reason
        )
        return GuildScheduledEvent(_with_guild_id(item, guild_id), self)

    async def edit_guild_scheduled_event(
        self,
        guild_id: str,
        event_id: str,
        options: ScheduledEventOptions | Mapping[str, Any],
        *,
        reason: str | None = None,
    ) -> GuildScheduledEvent:
        """Edit a scheduled event."""
        transport = self._require_transport()
        item = await _events_api.edit_scheduled_event(
            transport, guild_id, event_id, self._event_options(options), reason=reason
        )
        return GuildScheduledEvent(_with_guild_id(item, guild_id), self)

    async def delete_guild_scheduled_event(self, guild_id: str, event_id: str) -> None:
        """Delete a scheduled event."""
        transport = self._require_transport()
        await _events_api.delete_scheduled_event(transport, guild_id, event_id)

    async def get_guild_scheduled_event_users(
        self,
        guild_id: str,
        event_id: str,
        *,
        limit: int | None = None,
        before: str | None = None,
        after: str | None = None,
        with_member: bool = False,
    ) -> list[ScheduledEventUser]:
        """List users subscribed to a scheduled event."""
        request = ScheduledEventUsersRequest(limit=limit, before=before, after=after, with_member=with_member)
        transport = self._require_transport()
        items = await _events_api.fetch_scheduled_event_users(transport, guild_id, event_id, request)
        result: list[ScheduledEventUser] = []
        for item in items:
            user_data = item.get("user")
            if not isinstance(user_data, dict):
                continue
            member = item.get("member")
            result.append(
                ScheduledEventUser(
                    event_id=str(item.get("guild_scheduled_event_id", event_id)),
                    user=User.from_payload(user_data, self),
                    member=member if isinstance(member, dict) else None,
                )
            )
        return result
