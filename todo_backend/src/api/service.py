"""
Todo service: input validation and orchestration on top of a Repository.

Validation lives here so that repository backends only deal with storage
concerns. Errors from the repository are never swallowed: TodoNotFoundError
and BackendError reach the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import TodoNotFoundError
from .models import TodoEntity, validate_text
from .repositories import Repository

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoService:
    """Business operations for todos, independent of the storage backend."""

    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    @property
    def repository(self) -> Repository:
        return self._repository

    def create_todo(self, text: str) -> TodoEntity:
        """
        Create a todo.

        The text is checked for emptiness after trimming but stored as given.

        Raises:
            InvalidInputError: text is empty, whitespace-only or not valid UTF-8.
        """
        validate_text(text)
        todo = self._repository.create(text)
        logger.info("Created todo %d", todo["id"])
        return todo

    def get_todo_by_id(self, todo_id: int) -> TodoEntity:
        """Return one todo; raises TodoNotFoundError when it does not exist."""
        try:
            return self._repository.get_by_id(todo_id)
        except TodoNotFoundError:
            logger.debug("Todo %d not found", todo_id)
            raise

    def get_all_todos(self) -> List[TodoEntity]:
        """Return all todos, newest first."""
        return self._repository.get_all()

    def update_todo(self, todo_id: int, text: str) -> TodoEntity:
        """
        Replace the text of an existing todo.

        The todo is loaded before writing so a missing id is reported as
        TodoNotFoundError regardless of how the backend signals zero affected rows.

        Raises:
            InvalidInputError: text is empty, whitespace-only or not valid UTF-8.
            TodoNotFoundError: no todo with this id.
        """
        validate_text(text)
        self.get_todo_by_id(todo_id)
        todo = self._repository.update(todo_id, text)
        logger.info("Updated todo %d", todo_id)
        return todo

    def delete_todo(self, todo_id: int) -> None:
        """Delete a todo; raises TodoNotFoundError when it does not exist."""
        try:
            self._repository.delete(todo_id)
        except TodoNotFoundError:
            logger.debug("Todo %d not found for delete", todo_id)
            raise
        logger.info("Deleted todo %d", todo_id)

    def truncate_todos(self) -> None:
        """Remove every todo. Only wired to the HTTP layer when test routes are enabled."""
        self._repository.truncate()
        logger.warning("All todos removed")
