from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import List, Optional

from .errors import TodoNotFoundError
from .models import TodoEntity, utc_now, validate_text

logger = logging.getLogger(__name__)

# DB_PATH value that selects the in-process store instead of a SQLite file.
MEMORY_STORAGE = "memory"


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends.

    Lookups of a missing id raise TodoNotFoundError; storage engine failures
    raise BackendError.
    """

    # Backend label reported by the health check.
    name: str = ""

    @abstractmethod
    def create(self, text: str) -> TodoEntity:
        """Create and return a new TodoEntity with a fresh id and timestamps."""

    @abstractmethod
    def get_by_id(self, todo_id: int) -> TodoEntity:
        """Return the TodoEntity with this id."""

    @abstractmethod
    def get_all(self) -> List[TodoEntity]:
        """Return every TodoEntity, most recently created first."""

    @abstractmethod
    def update(self, todo_id: int, text: str) -> TodoEntity:
        """Replace the text of an existing TodoEntity and refresh updated_at."""

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """Remove a TodoEntity by id."""

    @abstractmethod
    def truncate(self) -> None:
        """Remove every TodoEntity. Used by tests and reset flows."""

    def close(self) -> None:
        """Release underlying resources. Backends without any keep the no-op."""

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _check_text(text: str) -> None:
        validate_text(text)


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository. State lives only in this instance and is
    lost with it; ids keep increasing across deletes and truncates.
    """

    name = "memory"

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: List[TodoEntity] = []
        self._next_id = 1

    def _index_of(self, todo_id: int) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item["id"] == todo_id:
                return i
        return None

    def create(self, text: str) -> TodoEntity:
        self._check_text(text)
        with self._lock:
            now = utc_now()
            entity: TodoEntity = {
                "id": self._next_id,
                "text": text,
                "created_at": now,
                "updated_at": now,
            }
            self._next_id += 1
            self._items.append(entity)
            return entity.copy()

    def get_by_id(self, todo_id: int) -> TodoEntity:
        with self._lock:
            i = self._index_of(todo_id)
            if i is None:
                raise TodoNotFoundError(todo_id)
            return self._items[i].copy()

    def get_all(self) -> List[TodoEntity]:
        # Insertion order is creation order, so reversing it gives newest first.
        with self._lock:
            return [item.copy() for item in reversed(self._items)]

    def update(self, todo_id: int, text: str) -> TodoEntity:
        self._check_text(text)
        with self._lock:
            i = self._index_of(todo_id)
            if i is None:
                raise TodoNotFoundError(todo_id)
            updated = self._items[i].copy()
            updated["text"] = text
            updated["updated_at"] = max(utc_now(), updated["created_at"])
            self._items[i] = updated
            return updated.copy()

    def delete(self, todo_id: int) -> None:
        with self._lock:
            i = self._index_of(todo_id)
            if i is None:
                raise TodoNotFoundError(todo_id)
            del self._items[i]

    def truncate(self) -> None:
        with self._lock:
            self._items.clear()


# PUBLIC_INTERFACE
def build_repository(storage: str) -> Repository:
    """
    Factory to return the repository selected by a storage location.
    - "memory": InMemoryRepository
    - anything else: SQLiteRepository backed by that file path
    """
    if storage.strip().lower() == MEMORY_STORAGE:
        logger.info("Using in-memory todo storage")
        return InMemoryRepository()

    from .db import SQLiteRepository

    logger.info("Using SQLite todo storage at %s", storage)
    return SQLiteRepository(storage)
