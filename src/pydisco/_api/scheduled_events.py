"""Guild scheduled event endpoints.

Endpoints:
  - GET    /guilds/{guild_id}/scheduled-events
  - GET    /guilds/{guild_id}/scheduled-events/{event_id}
  - POST   /guilds/{guild_id}/scheduled-events
  - PATCH  /guilds/{guild_id}/scheduled-events/{event_id}
  - DELETE /guilds/{guild_id}/scheduled-events/{event_id}
  - GET    /guilds/{guild_id}/scheduled-events/{event_id}/users
"""

from __future__ import annotations

from typing import Any

from pydisco._api._common import build_route, expect_list, expect_object
from pydisco._constants import GUILD_SCHEDULED_EVENT, GUILD_SCHEDULED_EVENT_USERS, GUILD_SCHEDULED_EVENTS
from pydisco._transport import Transport
from pydisco.models.requests import ScheduledEventOptions, ScheduledEventUsersRequest


def _with_user_count(enabled: bool) -> dict[str, str] | None:
    return {"with_user_count": "true"} if enabled else None


async def fetch_scheduled_events(
    transport: Transport,
    guild_id: str,
    *,
    with_user_count: bool = False,
) -> list[dict[str, Any]]:
    endpoint = build_route(GUILD_SCHEDULED_EVENTS, guild_id=guild_id)
    decoded = await transport.request("GET", endpoint, params=_with_user_count(with_user_count))
    return expect_list(endpoint, decoded)


async def fetch_scheduled_event(
    transport: Transport,
    guild_id: str,
    event_id: str,
    *,
    with_user_count: bool = False,
) -> dict[str, Any]:
    endpoint = build_route(GUILD_SCHEDULED_EVENT, guild_id=guild_id, event_id=event_id)
    decoded = await transport.request("GET", endpoint, params=_with_user_count(with_user_count))
    return expect_object(endpoint, decoded)


async def create_scheduled_event(
    transport: Transport,
    guild_id: str,
    options: ScheduledEventOptions,
    *,
    reason: str | None = None,
) -> dict[str, Any]:
    endpoint = build_route(GUILD_SCHEDULED_EVENTS, guild_id=guild_id)
    decoded = await transport.request("POST", endpoint, json_body=options.to_payload(), reason=reason)
    return expect_object(endpoint, decoded)


async def edit_scheduled_event(
    transport: Transport,
    guild_id: str,
    event_id: str,
    options: ScheduledEventOptions,
    *,
    reason: str | None = None,
) -> dict[str, Any]:
    endpoint = build_route(GUILD_SCHEDULED_EVENT, guild_id=guild_id, event_id=event_id)
    decoded = await transport.request("PATCH", endpoint, json_body=options.to_payload(), reason=reason)
    return expect_object(endpoint, decoded)


async def delete_scheduled_event(transport: Transport, guild_id: str, event_id: str) -> None:
    endpoint = build_route(GUILD_SCHEDULED_EVENT, guild_id=guild_id, event_id=event_id)
    await transport.request("DELETE", endpoint)


async def fetch_scheduled_event_users(
    transport: Transport,
    guild_id: str,
    event_id: str,
    request: ScheduledEventUsersRequest,
) -> list[dict[str, Any]]:
    endpoint = build_route(GUILD_SCHEDULED_EVENT_USERS, guild_id=guild_id, event_id=event_id)
    decoded = await transport.request("GET", endpoint, params=request.to_params() or None)
    return expect_list(endpoint, decoded)
