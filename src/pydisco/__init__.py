"""pydisco - Async Python client with a partial-update entity cache."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydisco")
except PackageNotFoundError:
    __version__ = "0+local"
from pydisco.client import DiscoClient
from pydisco.config import DiscoConfig
from pydisco.exceptions import (
    DiscoApiError,
    DiscoConfigError,
    DiscoError,
    DiscoInvalidIdentifierError,
    DiscoNotFoundError,
    DiscoRateLimitError,
    DiscoTimestampError,
    DiscoTransportError,
)
from pydisco.models import (
    AutomodAction,
    AutomodActionType,
    AutomodEventType,
    AutomodRule,
    AutomodRuleOptions,
    AutomodTriggerMetadata,
    AutomodTriggerType,
    Guild,
    GuildScheduledEvent,
    ScheduledEventEntityMetadata,
    ScheduledEventEntityType,
    ScheduledEventOptions,
    ScheduledEventPrivacyLevel,
    ScheduledEventStatus,
    ScheduledEventUser,
    User,
)
from pydisco.state.resolve import PartialEntity, resolve
from pydisco.state.store import EntityCollection

__all__ = [
    "__version__",
    "AutomodAction",
    "AutomodActionType",
    "AutomodEventType",
    "AutomodRule",
    "AutomodRuleOptions",
    "AutomodTriggerMetadata",
    "AutomodTriggerType",
    "DiscoApiError",
    "DiscoClient",
    "DiscoConfig",
    "DiscoConfigError",
    "DiscoError",
    "DiscoInvalidIdentifierError",
    "DiscoNotFoundError",
    "DiscoRateLimitError",
    "DiscoTimestampError",
    "DiscoTransportError",
    "EntityCollection",
    "Guild",
    "GuildScheduledEvent",
    "PartialEntity",
    "ScheduledEventEntityMetadata",
    "ScheduledEventEntityType",
    "ScheduledEventOptions",
    "ScheduledEventPrivacyLevel",
    "ScheduledEventStatus",
    "ScheduledEventUser",
    "User",
    "resolve",
]
