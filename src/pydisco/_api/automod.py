"""Auto-moderation rule endpoints.

Endpoints:
  - GET    /guilds/{guild_id}/auto-moderation/rules
  - GET    /guilds/{guild_id}/auto-moderation/rules/{rule_id}
  - POST   /guilds/{guild_id}/auto-moderation/rules
  - PATCH  /guilds/{guild_id}/auto-moderation/rules/{rule_id}
  - DELETE /guilds/{guild_id}/auto-moderation/rules/{rule_id}

Functions return raw payloads; wrapping them in entities is the client's job.
"""

from __future__ import annotations

from typing import Any

from pydisco._api._common import build_route, expect_list, expect_object
from pydisco._constants import GUILD_AUTOMOD_RULE, GUILD_AUTOMOD_RULES
from pydisco._transport import Transport
from pydisco.models.requests import AutomodRuleOptions


async def fetch_automod_rules(transport: Transport, guild_id: str) -> list[dict[str, Any]]:
    endpoint = build_route(GUILD_AUTOMOD_RULES, guild_id=guild_id)
    decoded = await transport.request("GET", endpoint)
    return expect_list(endpoint, decoded)


async def fetch_automod_rule(transport: Transport, guild_id: str, rule_id: str) -> dict[str, Any]:
    endpoint = build_route(GUILD_AUTOMOD_RULE, guild_id=guild_id, rule_id=rule_id)
    decoded = await transport.request("GET", endpoint)
    return expect_object(endpoint, decoded)


async def create_automod_rule(
    transport: Transport,
    guild_id: str,
    options: AutomodRuleOptions,
    *,
    reason: str | None = None,
) -> dict[str, Any]:
    endpoint = build_route(GUILD_AUTOMOD_RULES, guild_id=guild_id)
    decoded = await transport.request("POST", endpoint, json_body=options.to_payload(), reason=reason)
    return expect_object(endpoint, decoded)


async def edit_automod_rule(
    transport: Transport,
    guild_id: str,
    rule_id: str,
    options: AutomodRuleOptions,
    *,
    reason: str | None = None,
) -> dict[str, Any]:
    endpoint = build_route(GUILD_AUTOMOD_RULE, guild_id=guild_id, rule_id=rule_id)
    decoded = await transport.request("PATCH", endpoint, json_body=options.to_payload(), reason=reason)
    return expect_object(endpoint, decoded)


async def delete_automod_rule(
    transport: Transport,
    guild_id: str,
    rule_id: str,
    *,
    reason: str | None = None,
) -> None:
    endpoint = build_route(GUILD_AUTOMOD_RULE, guild_id=guild_id, rule_id=rule_id)
    await transport.request("DELETE", endpoint, reason=reason)
