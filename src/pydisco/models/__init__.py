"""Entity and option models."""

from pydisco.models._base import Base, DiscoEnum, parse_snowflake, snowflake_time
from pydisco.models.automod import (
    AutomodAction,
    AutomodActionType,
    AutomodEventType,
    AutomodRule,
    AutomodTriggerType,
)
from pydisco.models.guild import Guild
from pydisco.models.requests import (
    AutomodRuleOptions,
    AutomodTriggerMetadata,
    ScheduledEventEntityMetadata,
    ScheduledEventOptions,
    ScheduledEventUsersRequest,
)
from pydisco.models.scheduled_event import (
    GuildScheduledEvent,
    ScheduledEventEntityType,
    ScheduledEventPrivacyLevel,
    ScheduledEventStatus,
    ScheduledEventUser,
)
from pydisco.models.user import User

__all__ = [
    "AutomodAction",
    "AutomodActionType",
    "AutomodEventType",
    "AutomodRule",
    "AutomodRuleOptions",
    "AutomodTriggerMetadata",
    "AutomodTriggerType",
    "Base",
    "DiscoEnum",
    "Guild",
    "GuildScheduledEvent",
    "ScheduledEventEntityMetadata",
    "ScheduledEventEntityType",
    "ScheduledEventOptions",
    "ScheduledEventPrivacyLevel",
    "ScheduledEventStatus",
    "ScheduledEventUser",
    "ScheduledEventUsersRequest",
    "User",
    "parse_snowflake",
    "snowflake_time",
]
