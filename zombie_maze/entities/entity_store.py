from typing import Dict, Iterator, List, Optional

from zombie_maze.entities.entities import Entity, EntityKind


class EntityStore:
    """
    Owns every entity of a running level and hands out stable integer handles.

    Handles are never reused, so a handle kept after removal simply resolves
    to None instead of aliasing a newer entity.
    """

    def __init__(self):
        self._entities: Dict[int, Entity] = {}
        self._next_handle = 0

    def add(self, entity: Entity) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._entities[handle] = entity
        return handle

    def get(self, handle: int) -> Optional[Entity]:
        return self._entities.get(handle)

    def remove(self, handle: int) -> Optional[Entity]:
        return self._entities.pop(handle, None)

    def clear(self) -> None:
        """Drop all entities. Handle numbering keeps counting up."""
        self._entities.clear()

    def of_kind(self, kind: EntityKind) -> List[Entity]:
        return [entity for entity in self._entities.values() if entity.kind == kind]

    def remove_inactive(self, kind: EntityKind) -> int:
        """Remove inactive entities of one kind; returns how many were dropped."""
        dead = [h for h, e in self._entities.items() if e.kind == kind and not e.active]
        for handle in dead:
            self.remove(handle)
        return len(dead)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))
