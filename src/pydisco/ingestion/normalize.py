"""Normalization helpers.

Value converters used by the merge field tables.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import IntEnum
from typing import Any, TypeVar

from pydisco.exceptions import DiscoTimestampError

TEnum = TypeVar("TEnum", bound=IntEnum)


def parse_iso_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    ``None`` passes through so nullable fields can be cleared. Anything
    that is not a parseable string raises :class:`DiscoTimestampError`.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise DiscoTimestampError(f"malformed timestamp: {value!r}", value=value) from exc
    else:
        raise DiscoTimestampError(f"timestamp must be a string, got {type(value).__name__}", value=value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def to_enum(enum_cls: type[TEnum], value: Any) -> TEnum | None:
    """Coerce *value* into *enum_cls*.

    Unmapped values and non-integral numbers use the enum's fallback.
    """
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        return enum_cls(-1)
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return enum_cls(-1)
    return enum_cls(parsed)


def to_str_list(value: Any) -> list[str]:
    """Normalize a list of ids to strings (role and channel ids)."""
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]
