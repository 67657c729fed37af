"""
Generic in-memory CRUD repository. Keyed by a caller-defined string id.

The repository knows nothing about the entity type: callers supply an id getter
and an id setter (which may mutate-and-return or return a copy with the id stamped).
"""

import logging
import threading
import uuid
from typing import Callable, Generic, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

IdGetter = Callable[[T], str | None]
IdSetter = Callable[[T, str], T]


class InMemoryCrudRepository(Generic[T]):
    """Dict-backed store; each operation holds the lock, no multi-key transactions."""

    def __init__(self, id_getter: IdGetter, id_setter: IdSetter) -> None:
        self._id_getter = id_getter
        self._id_setter = id_setter
        self._storage: dict[str, T] = {}
        self._lock = threading.Lock()

    def save(self, entity: T) -> T:
        """Store entity under its id, assigning a fresh UUID first if it has none."""
        existing_id = self._id_getter(entity)
        if existing_id is None:
            entity_id = str(uuid.uuid4())
            entity = self._id_setter(entity, entity_id)
        else:
            entity_id = existing_id
        with self._lock:
            self._storage[entity_id] = entity
        logger.debug("[repository:save] id=%s assigned=%s", entity_id, existing_id is None)
        return entity

    def save_all(self, entities: Iterable[T]) -> list[T]:
        return [self.save(e) for e in entities]

    def find_by_id(self, entity_id: str) -> T | None:
        with self._lock:
            return self._storage.get(entity_id)

    def exists_by_id(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._storage

    def find_all(self) -> list[T]:
        with self._lock:
            return list(self._storage.values())

    def find_all_by_id(self, ids: Iterable[str]) -> list[T]:
        """Entities for the ids that are present, in input order. Missing ids are skipped."""
        with self._lock:
            found = [self._storage.get(i) for i in ids]
        return [e for e in found if e is not None]

    def count(self) -> int:
        with self._lock:
            return len(self._storage)

    def delete_by_id(self, entity_id: str) -> None:
        with self._lock:
            self._storage.pop(entity_id, None)

    def delete(self, entity: T) -> None:
        entity_id = self._id_getter(entity)
        if entity_id is not None:
            self.delete_by_id(entity_id)

    def delete_all_by_id(self, ids: Iterable[str]) -> None:
        for i in ids:
            self.delete_by_id(i)

    def delete_all(self, entities: Iterable[T] | None = None) -> None:
        """Delete the given entities, or everything when called without arguments."""
        if entities is None:
            with self._lock:
                removed = len(self._storage)
                self._storage.clear()
            logger.info("[repository:delete_all] cleared %d entities", removed)
            return
        for e in entities:
            self.delete(e)
