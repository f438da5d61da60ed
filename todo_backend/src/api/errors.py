"""
Domain errors for the todo backend.

Repositories and the service raise these; only the HTTP layer turns them
into status codes. No framework imports allowed.
"""


class TodoError(Exception):
    """Base error for all todo domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidInputError(TodoError):
    """Raised when caller-supplied todo text is empty or whitespace-only."""


class TodoNotFoundError(TodoError):
    """Raised when no todo with the given id exists."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"todo with id {todo_id} not found")
        self.todo_id = todo_id


class BackendError(TodoError):
    """Raised when the storage engine itself fails.

    The lower-level exception is chained as ``__cause__``.
    """
