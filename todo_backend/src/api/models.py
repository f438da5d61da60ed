from __future__ import annotations

from datetime import datetime, timezone
from typing import TypedDict

from .errors import InvalidInputError


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item for non-ORM storage
    backends.

    Fields:
    - id: Unique positive integer identifier assigned by the repository
    - text: Item text, stored exactly as submitted
    - created_at: UTC creation timestamp, never changed after creation
    - updated_at: UTC last update timestamp (equals created_at until the first update)
    """

    id: int
    text: str
    created_at: datetime
    updated_at: datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def is_blank(text: object) -> bool:
    """True when text is not a string or is empty after trimming whitespace."""
    return not isinstance(text, str) or not text.strip()


def validate_text(text: object) -> None:
    """
    Raise InvalidInputError unless text is a non-blank string that can be
    stored and serialized as UTF-8 (lone surrogates cannot).
    """
    if is_blank(text):
        raise InvalidInputError("text cannot be empty")
    try:
        text.encode("utf-8")  # type: ignore[union-attr]
    except UnicodeEncodeError as exc:
        raise InvalidInputError("text must be valid UTF-8") from exc
