"""Partial-payload merge engine.

Each entity kind declares a fixed field table. :func:`merge` walks that
table and applies only the wire keys that are present in the payload.
Presence is always tested with ``in`` / ``isinstance``, never truthiness,
so ``0``, ``False``, ``""`` and ``[]`` are real values.

Conversions are staged before anything is assigned: if a converter raises
(e.g. :class:`pydisco.exceptions.DiscoTimestampError`), the entity keeps
exactly the state it had before the call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """A scalar wire key copied (optionally converted) onto one attribute.

    An explicit ``None`` clears the attribute only when ``nullable`` is set;
    for other fields it is treated like an absent key.
    """

    wire: str
    attr: str
    convert: Callable[[Any], Any] | None = None
    nullable: bool = False


@dataclass(frozen=True, slots=True)
class NestedFieldSpec:
    """A wire sub-object flattened onto several attributes.

    ``attrs`` maps attribute name to sub-key. When the wire value is a dict,
    every attribute is reassigned, so sub-keys missing from it become
    ``None``.
    """

    wire: str
    attrs: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class ListFieldSpec:
    """A wire list whose elements go through a pure formatter.

    The whole list is replaced; elements are never merged individually.
    """

    wire: str
    attr: str
    element: Callable[[Any], Any]


MergeField = FieldSpec | NestedFieldSpec | ListFieldSpec


def _stage(fields: tuple[MergeField, ...], payload: Mapping[str, Any], owner: str) -> dict[str, Any]:
    staged: dict[str, Any] = {}
    for spec in fields:
        if spec.wire not in payload:
            continue
        value = payload[spec.wire]

        if isinstance(spec, NestedFieldSpec):
            if not isinstance(value, Mapping):
                continue
            for attr, sub_key in spec.attrs.items():
                staged[attr] = value.get(sub_key)
            continue

        if isinstance(spec, ListFieldSpec):
            if not isinstance(value, list):
                continue
            staged[spec.attr] = [spec.element(item) for item in value]
            continue

        if value is None:
            if not spec.nullable:
                _logger.debug("%s: ignoring null for non-nullable field %s", owner, spec.wire)
                continue
            staged[spec.attr] = None
            continue
        staged[spec.attr] = spec.convert(value) if spec.convert is not None else value
    return staged


def merge(entity: object, payload: Mapping[str, Any], fields: tuple[MergeField, ...]) -> dict[str, Any]:
    """Apply *payload* onto *entity* using the field table *fields*.

    Returns the previous value of every attribute that was assigned.
    """
    staged = _stage(fields, payload, type(entity).__name__)
    previous: dict[str, Any] = {}
    for attr, value in staged.items():
        previous[attr] = getattr(entity, attr, None)
        setattr(entity, attr, value)
    return previous
