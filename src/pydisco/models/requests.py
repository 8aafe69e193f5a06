"""Pydantic option models for client entrypoints.

These models provide a consistent "validate → serialize → send" flow for
create/edit calls. Only fields the caller set are sent, so an explicit
``None`` (e.g. clearing ``scheduled_end_time``) survives while untouched
fields are left out of the request.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pydisco.models.automod import AutomodAction, AutomodEventType, AutomodTriggerType
from pydisco.models.scheduled_event import (
    ScheduledEventEntityType,
    ScheduledEventPrivacyLevel,
    ScheduledEventStatus,
)


class _OptionsModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON body containing only the explicitly set fields."""
        return self.model_dump(mode="json", exclude_unset=True)


class AutomodTriggerMetadata(_OptionsModel):
    keyword_filter: list[str] | None = None
    regex_patterns: list[str] | None = None
    presets: list[int] | None = None
    allow_list: list[str] | None = None
    mention_total_limit: int | None = Field(default=None, ge=0, le=50)


class AutomodRuleOptions(_OptionsModel):
    """Fields accepted when creating or editing an auto-moderation rule."""

    name: str | None = None
    event_type: AutomodEventType | None = None
    trigger_type: AutomodTriggerType | None = None
    trigger_metadata: AutomodTriggerMetadata | None = None
    actions: list[AutomodAction] | None = None
    enabled: bool | None = None
    exempt_roles: list[str] | None = None
    exempt_channels: list[str] | None = None

    @field_validator("actions", mode="before")
    @classmethod
    def _coerce_actions(cls, value: Any) -> Any:
        # Accept wire-shaped actions ({"type": 1, "metadata": {...}}) too.
        if not isinstance(value, list):
            return value
        return [
            AutomodAction.from_api(item) if isinstance(item, dict) and "metadata" in item else item
            for item in value
        ]

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", exclude_unset=True, exclude={"actions"})
        if "actions" in self.model_fields_set:
            payload["actions"] = None if self.actions is None else [action.to_payload() for action in self.actions]
        return payload


class ScheduledEventEntityMetadata(_OptionsModel):
    location: str | None = Field(default=None, max_length=100)


class ScheduledEventOptions(_OptionsModel):
    """Fields accepted when creating or editing a scheduled event."""

    channel_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    scheduled_start_time: datetime | None = None
    scheduled_end_time: datetime | None = None
    privacy_level: ScheduledEventPrivacyLevel | None = None
    entity_type: ScheduledEventEntityType | None = None
    entity_metadata: ScheduledEventEntityMetadata | None = None
    status: ScheduledEventStatus | None = None
    image: str | None = None
    """Cover image as a data URI."""


class ScheduledEventUsersRequest(_OptionsModel):
    """Query for the scheduled event subscribers endpoint."""

    limit: int | None = Field(default=None, ge=1, le=100)
    before: str | None = None
    after: str | None = None
    with_member: bool = False

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.before is not None:
            params["before"] = self.before
        if self.after is not None:
            params["after"] = self.after
        if self.with_member:
            params["with_member"] = "true"
        return params
