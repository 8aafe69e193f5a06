"""Cross-entity reference resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PartialEntity:
    """Stand-in for an entity that is not cached; carries only its id.

    Stand-ins are never upgraded in place. Re-resolve through the owning
    collection to pick up the real object once it is cached.
    """

    id: Any


def resolve(collection: Mapping[str, T], entity_id: Any) -> T | PartialEntity:
    """Return the cached entry for *entity_id* or a fresh stand-in.

    Never inserts into *collection*.
    """
    entry = collection.get(str(entity_id))
    if entry is not None:
        return entry
    return PartialEntity(id=entity_id)
