"""Identity base and shared enum for cached entities.

Every cached entity inherits from :class:`Base` which provides:

* an immutable ``id`` (kept exactly as received) validated as a snowflake,
* a ``created_at`` instant decoded from the snowflake, no request needed,
* ``update(data)`` which runs the partial-payload merge engine against the
  subclass ``_FIELDS`` table.

Enums inherit from :class:`DiscoEnum` which adds an ``UNKNOWN`` member at
``-1`` and a ``_missing_`` hook that returns ``UNKNOWN`` for any value
without a mapped member.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

from pydisco._constants import DISCORD_EPOCH_MS
from pydisco.exceptions import DiscoInvalidIdentifierError
from pydisco.state.merge import MergeField, merge

_SNOWFLAKE_MAX = (1 << 64) - 1
_SNOWFLAKE_DIGITS = len(str(_SNOWFLAKE_MAX))
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_snowflake(value: Any) -> int:
    """Parse a snowflake id given as an int or a decimal string.

    Raises :class:`DiscoInvalidIdentifierError` for anything else.
    """
    if isinstance(value, bool):
        raise DiscoInvalidIdentifierError(f"invalid snowflake: {value!r}", value=value)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.isascii() and value.isdigit() and len(value) <= _SNOWFLAKE_DIGITS:
        parsed = int(value)
    else:
        raise DiscoInvalidIdentifierError(f"invalid snowflake: {value!r}", value=value)
    if not 0 <= parsed <= _SNOWFLAKE_MAX:
        raise DiscoInvalidIdentifierError(f"snowflake out of range: {value!r}", value=value)
    return parsed


def snowflake_time(value: Any) -> datetime:
    """Return the UTC creation instant encoded in a snowflake."""
    ms = (parse_snowflake(value) >> 22) + DISCORD_EPOCH_MS
    return _UNIX_EPOCH + timedelta(milliseconds=ms)


class DiscoEnum(enum.IntEnum):
    """Base for API integer enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    """

    @classmethod
    def _missing_(cls, value: object) -> DiscoEnum:
        # pylint: disable=no-member
        if hasattr(cls, "UNKNOWN"):
            unknown: DiscoEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class Base:
    """Identity and merge plumbing shared by all cached entities."""

    _FIELDS: ClassVar[tuple[MergeField, ...]] = ()
    """Field table consumed by :meth:`update`."""

    def __init__(self, entity_id: Any) -> None:
        self._created_at = snowflake_time(entity_id)
        self._id = entity_id

    @property
    def id(self) -> Any:
        return self._id

    @property
    def created_at(self) -> datetime:
        """When the entity was created, decoded from its id."""
        return self._created_at

    def update(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Merge a (partial) payload in place.

        Keys absent from *data* are left untouched. Returns the previous
        values of the attributes that were assigned.
        """
        return merge(self, data, self._FIELDS)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id!r}>"
