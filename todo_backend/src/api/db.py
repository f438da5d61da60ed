from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, List

from .errors import BackendError, TodoNotFoundError
from .models import TodoEntity, utc_now
from .repositories import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    text: str = "text"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


_COLS = _Cols()

_SELECT_COLS = f"{_COLS.id}, {_COLS.text}, {_COLS.created_at}, {_COLS.updated_at}"

# Range of SQLite INTEGER; no stored row can have an id outside it.
_MIN_ROWID = -(2**63)
_MAX_ROWID = 2**63 - 1


def _format_dt(value: datetime) -> str:
    # Fixed width with offset so that text order matches time order.
    return value.isoformat(timespec="microseconds")


class SQLiteRepository(Repository):
    """
    SQLite repository implementing the Repository interface.

    Holds a single connection for its whole lifetime; call close() exactly once
    on shutdown (or use the instance as a context manager). The connection runs
    in autocommit mode and every operation is a single statement, so SQLite's
    own locking keeps each one atomic.
    """

    name = "sqlite"

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._closed = False
        try:
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
            self._connection = sqlite3.connect(
                db_path, check_same_thread=False, isolation_level=None
            )
        except (OSError, sqlite3.Error) as exc:
            raise BackendError(f"cannot open todo database at {db_path}: {exc}") from exc
        self._connection.row_factory = sqlite3.Row
        try:
            self._init_db()
        except BackendError:
            self._connection.close()
            raise

    @property
    def db_path(self) -> str:
        return self._db_path

    @contextmanager
    def _translate_errors(self, operation: str) -> Generator[sqlite3.Connection, None, None]:
        try:
            yield self._connection
        except sqlite3.Error as exc:
            logger.error("SQLite %s failed: %s", operation, exc)
            raise BackendError(f"todo storage failed during {operation}: {exc}") from exc

    def _init_db(self) -> None:
        with self._translate_errors("migration") as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.text} TEXT NOT NULL,
                    {_COLS.created_at} TEXT NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_created_at ON {_COLS.table}({_COLS.created_at})"
            )

    @staticmethod
    def _check_id(todo_id: int) -> None:
        if not _MIN_ROWID <= todo_id <= _MAX_ROWID:
            raise TodoNotFoundError(todo_id)

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": int(row[_COLS.id]),
            "text": str(row[_COLS.text]),
            "created_at": datetime.fromisoformat(row[_COLS.created_at]),
            "updated_at": datetime.fromisoformat(row[_COLS.updated_at]),
        }

    def create(self, text: str) -> TodoEntity:
        self._check_text(text)
        now = _format_dt(utc_now())
        # RETURNING statements are drained with fetchall() so the autocommit
        # transaction ends before the cursor is dropped.
        with self._translate_errors("create") as conn:
            rows = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.text}, {_COLS.created_at}, {_COLS.updated_at})
                VALUES (?, ?, ?)
                RETURNING {_SELECT_COLS}
                """,
                (text, now, now),
            ).fetchall()
        return self._row_to_entity(rows[0])

    def get_by_id(self, todo_id: int) -> TodoEntity:
        self._check_id(todo_id)
        with self._translate_errors("get_by_id") as conn:
            row = conn.execute(
                f"SELECT {_SELECT_COLS} FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
            ).fetchone()
        if row is None:
            raise TodoNotFoundError(todo_id)
        return self._row_to_entity(row)

    def get_all(self) -> List[TodoEntity]:
        with self._translate_errors("get_all") as conn:
            rows = conn.execute(
                f"""
                SELECT {_SELECT_COLS} FROM {_COLS.table}
                ORDER BY {_COLS.created_at} DESC, {_COLS.id} DESC
                """
            ).fetchall()
        return [self._row_to_entity(r) for r in rows]

    def update(self, todo_id: int, text: str) -> TodoEntity:
        self._check_text(text)
        self._check_id(todo_id)
        now = _format_dt(utc_now())
        with self._translate_errors("update") as conn:
            rows = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.text} = ?, {_COLS.updated_at} = MAX(?, {_COLS.created_at})
                WHERE {_COLS.id} = ?
                RETURNING {_SELECT_COLS}
                """,
                (text, now, todo_id),
            ).fetchall()
        if not rows:
            raise TodoNotFoundError(todo_id)
        return self._row_to_entity(rows[0])

    def delete(self, todo_id: int) -> None:
        self._check_id(todo_id)
        with self._translate_errors("delete") as conn:
            rows = conn.execute(
                f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ? RETURNING {_COLS.id}", (todo_id,)
            ).fetchall()
        if not rows:
            raise TodoNotFoundError(todo_id)

    def truncate(self) -> None:
        with self._translate_errors("truncate") as conn:
            conn.execute(f"DELETE FROM {_COLS.table}")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._connection.close()
        logger.info("Closed todo database at %s", self._db_path)
