"""
In-memory storage shared by all repositories.

Each repository owns one keyed collection guarded by its own
reader/writer lock: reads run concurrently, writes are exclusive.
Rows are deep-copied on the way in and on the way out, so callers can
never mutate stored state through an object they hold.
"""

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from dentallab.core.exceptions import InternalError, NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryRepository(Generic[T]):
    """Keyed, soft-delete aware collection of domain entities.

    Subclasses name the entity and list the fields an update may never change.
    """

    entity_name = "entity"
    immutable_fields: Tuple[str, ...] = ()

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._data: Dict[str, T] = {}

    @staticmethod
    def _clone(entity: T) -> T:
        return copy.deepcopy(entity)

    @staticmethod
    def _is_active(entity) -> bool:
        return not entity.is_deleted

    def create(self, entity: T) -> T:
        with self._lock.write():
            if entity.id in self._data:
                logger.error(
                    "Duplicate ID on create",
                    extra={"context": {"entity": self.entity_name, "id": entity.id}},
                )
                raise InternalError(f"{self.entity_name} id already exists")
            self._data[entity.id] = self._clone(entity)
        return self._clone(entity)

    def get_by_id(self, entity_id: str) -> Optional[T]:
        with self._lock.read():
            entity = self._data.get(entity_id)
            if entity is None or not self._is_active(entity):
                return None
            return self._clone(entity)

    def update(self, entity_id: str, change: Callable[[T], None]) -> T:
        """Read, change and store one row under a single write lock.

        ``change`` receives a copy of the latest stored row and may raise to
        abort; nothing is stored then. It must not call back into this
        repository.
        """
        with self._lock.write():
            existing = self._data.get(entity_id)
            if existing is None or not self._is_active(existing):
                raise NotFoundError()
            entity = self._clone(existing)
            change(entity)
            for name in self.immutable_fields:
                if getattr(existing, name) != getattr(entity, name):
                    raise InternalError(f"{self.entity_name}.{name} is immutable")
            self._data[entity_id] = entity
            return self._clone(entity)

    def delete(self, entity_id: str) -> bool:
        """Soft delete: the row stays in storage with its tombstone set."""
        with self._lock.write():
            entity = self._data.get(entity_id)
            if entity is None or not self._is_active(entity):
                return False
            entity.delete()
        return True

    def total_rows(self) -> int:
        """Number of stored rows, soft-deleted ones included."""
        with self._lock.read():
            return len(self._data)

    def _select(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock.read():
            rows = [
                self._clone(entity)
                for entity in self._data.values()
                if self._is_active(entity) and predicate(entity)
            ]
        return sorted(rows, key=lambda entity: entity.created_at)

    def _first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        with self._lock.read():
            for entity in self._data.values():
                if self._is_active(entity) and predicate(entity):
                    return self._clone(entity)
        return None
