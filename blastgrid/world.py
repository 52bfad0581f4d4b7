"""A small entity store with deferred despawning."""

from __future__ import annotations

import itertools
from typing import Any, Iterable, Optional, TypeVar

T = TypeVar("T")


class World:
    """Holds entities, their components and parent/child links.

    Spawning takes effect at once; despawning is queued until :meth:`flush`,
    so systems still see the entities they removed until they finish.
    Despawning an entity also removes its children.
    """

    def __init__(self) -> None:
        self._components: dict[int, dict[type, Any]] = {}
        self._parents: dict[int, int] = {}
        self._children: dict[int, list[int]] = {}
        self._pending: list[int] = []
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self._components)

    def spawn(self, *components: Any, parent: Optional[int] = None) -> int:
        """Create an entity holding ``components`` and return its id."""
        if parent is not None and parent not in self._components:
            raise KeyError(f"parent entity {parent} does not exist")
        entity = next(self._ids)
        self._components[entity] = {type(component): component for component in components}
        if parent is not None:
            self._parents[entity] = parent
            self._children.setdefault(parent, []).append(entity)
        return entity

    def despawn(self, entity: int) -> None:
        """Queue ``entity`` for removal at the next flush."""
        self._pending.append(entity)

    def flush(self) -> None:
        """Remove every entity queued for despawning."""
        pending, self._pending = self._pending, []
        for entity in pending:
            self._remove(entity)

    def _remove(self, entity: int) -> None:
        if entity not in self._components:
            return
        for child in self._children.pop(entity, []):
            self._remove(child)
        del self._components[entity]
        parent = self._parents.pop(entity, None)
        if parent is not None:
            siblings = self._children.get(parent)
            if siblings is not None and entity in siblings:
                siblings.remove(entity)

    def contains(self, entity: int) -> bool:
        """Return whether ``entity`` exists."""
        return entity in self._components

    def get(self, entity: int, component_type: type[T]) -> Optional[T]:
        """Return the component of the given type, or None."""
        components = self._components.get(entity)
        if components is None:
            return None
        return components.get(component_type)

    def has(self, entity: int, component_type: type) -> bool:
        """Return whether ``entity`` has a component of the given type."""
        return self.get(entity, component_type) is not None

    def parent_of(self, entity: int) -> Optional[int]:
        """Return the parent of ``entity``, or None."""
        return self._parents.get(entity)

    def children_of(self, entity: int) -> list[int]:
        """Return the children of ``entity``."""
        return list(self._children.get(entity, ()))

    def query(self, *component_types: type, without: Iterable[type] = ()) -> list[tuple]:
        """Return ``(entity, *components)`` for entities holding all the given types.

        Entities holding any type in ``without`` are left out. The result is a
        snapshot, so spawning or despawning while iterating it is safe.
        """
        excluded = tuple(without)
        results = []
        for entity, components in self._components.items():
            if any(t not in components for t in component_types):
                continue
            if any(t in components for t in excluded):
                continue
            results.append((entity, *(components[t] for t in component_types)))
        return results