"""In-memory entity collections.

An :class:`EntityCollection` maps ``str(id)`` to a live entity. It is the
only component that inserts or removes entities; entities themselves only
read collections through :func:`pydisco.state.resolve.resolve`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, Protocol, TypeVar


class _Mergeable(Protocol):
    @property
    def id(self) -> Any: ...

    def update(self, data: Mapping[str, Any]) -> dict[str, Any]: ...


E = TypeVar("E", bound=_Mergeable)


class EntityCollection(Mapping[str, E], Generic[E]):
    """Key-unique mapping from identifier to live entity.

    Parameters
    ----------
    factory
        Builds a new entity from a full payload, e.g.
        ``functools.partial(AutomodRule, client=client)``.
    """

    def __init__(self, factory: Callable[[Mapping[str, Any]], E]) -> None:
        self._factory = factory
        self._items: dict[str, E] = {}

    def __getitem__(self, key: object) -> E:
        return self._items[str(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"<EntityCollection size={len(self._items)}>"

    def add(self, item: E | Mapping[str, Any], *, replace: bool = False) -> E:
        """Insert an entity (or build one from a payload).

        An entity already cached under the same id is kept and returned
        unless *replace* is set.
        """
        if isinstance(item, Mapping):
            key = str(item.get("id"))
            if key in self._items and not replace:
                return self._items[key]
            entity = self._factory(item)
        else:
            entity = item
            key = str(entity.id)
            if key in self._items and not replace:
                return self._items[key]
        self._items[key] = entity
        return entity

    def update(self, data: Mapping[str, Any]) -> E:
        """Merge *data* into the cached entity, or build and insert it."""
        existing = self._items.get(str(data.get("id")))
        if existing is None:
            return self.add(data)
        existing.update(data)
        return existing

    def remove(self, entity_id: Any) -> E | None:
        """Drop and return the entity cached under *entity_id*."""
        return self._items.pop(str(entity_id), None)
