from datetime import datetime, timezone
from typing import List

import pytest

from src.api.errors import BackendError, InvalidInputError, TodoNotFoundError
from src.api.models import TodoEntity
from src.api.repositories import Repository
from src.api.service import TodoService


class RecordingRepository(Repository):
    """Test double that records calls and serves a single fixed todo (id 1)."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.todo: TodoEntity = {"id": 1, "text": "existing", "created_at": now, "updated_at": now}

    def create(self, text):
        self.calls.append(("create", text))
        return {**self.todo, "id": 2, "text": text}

    def get_by_id(self, todo_id):
        self.calls.append(("get_by_id", todo_id))
        if todo_id != 1:
            raise TodoNotFoundError(todo_id)
        return dict(self.todo)

    def get_all(self):
        self.calls.append(("get_all",))
        return [dict(self.todo)]

    def update(self, todo_id, text):
        self.calls.append(("update", todo_id, text))
        return {**self.todo, "text": text}

    def delete(self, todo_id):
        self.calls.append(("delete", todo_id))
        if todo_id != 1:
            raise TodoNotFoundError(todo_id)

    def truncate(self):
        self.calls.append(("truncate",))


class BrokenRepository(RecordingRepository):
    def get_all(self):
        raise BackendError("disk on fire")


class TestServiceWithTestDouble:
    def test_create_passes_untrimmed_text(self):
        repo = RecordingRepository()
        todo = TodoService(repo).create_todo("  milk  ")
        assert todo["text"] == "  milk  "
        assert repo.calls == [("create", "  milk  ")]

    @pytest.mark.parametrize("text", ["", " ", "\n\t "])
    def test_create_blank_never_reaches_repository(self, text):
        repo = RecordingRepository()
        with pytest.raises(InvalidInputError):
            TodoService(repo).create_todo(text)
        assert repo.calls == []

    def test_text_with_lone_surrogate_never_reaches_repository(self):
        repo = RecordingRepository()
        service = TodoService(repo)
        with pytest.raises(InvalidInputError, match="UTF-8"):
            service.create_todo("bad \ud800 text")
        with pytest.raises(InvalidInputError, match="UTF-8"):
            service.update_todo(1, "\udc00")
        assert repo.calls == []

    def test_create_rejects_non_string(self):
        repo = RecordingRepository()
        with pytest.raises(InvalidInputError):
            TodoService(repo).create_todo(None)
        assert repo.calls == []

    def test_update_loads_before_writing(self):
        repo = RecordingRepository()
        updated = TodoService(repo).update_todo(1, "bread")
        assert updated["text"] == "bread"
        assert repo.calls == [("get_by_id", 1), ("update", 1, "bread")]

    def test_update_missing_id_never_writes(self):
        repo = RecordingRepository()
        with pytest.raises(TodoNotFoundError):
            TodoService(repo).update_todo(999, "bread")
        assert repo.calls == [("get_by_id", 999)]

    def test_update_validates_before_loading(self):
        repo = RecordingRepository()
        with pytest.raises(InvalidInputError):
            TodoService(repo).update_todo(999, "   ")
        assert repo.calls == []

    def test_delete_propagates_not_found(self):
        repo = RecordingRepository()
        with pytest.raises(TodoNotFoundError):
            TodoService(repo).delete_todo(5)

    def test_truncate_delegates(self):
        repo = RecordingRepository()
        TodoService(repo).truncate_todos()
        assert repo.calls == [("truncate",)]

    def test_backend_error_passes_through_unchanged(self):
        with pytest.raises(BackendError, match="disk on fire"):
            TodoService(BrokenRepository()).get_all_todos()


class TestServiceScenarios:
    def test_create_then_list(self, service):
        created = service.create_todo("milk")
        todos = service.get_all_todos()
        assert len(todos) == 1
        assert todos[0]["id"] == 1
        assert todos[0]["text"] == "milk"
        assert todos[0]["created_at"] == todos[0]["updated_at"]
        assert todos[0] == created

    def test_update_then_get(self, service):
        created = service.create_todo("milk")
        service.update_todo(created["id"], "bread")
        fetched = service.get_todo_by_id(created["id"])
        assert fetched["text"] == "bread"
        assert fetched["created_at"] == created["created_at"]
        assert fetched["updated_at"] >= created["updated_at"]

    def test_update_blank_leaves_record_untouched(self, service):
        created = service.create_todo("milk")
        with pytest.raises(InvalidInputError):
            service.update_todo(created["id"], "")
        assert service.get_todo_by_id(created["id"]) == created

    def test_delete_then_get(self, service):
        created = service.create_todo("temporary")
        service.delete_todo(created["id"])
        with pytest.raises(TodoNotFoundError):
            service.get_todo_by_id(created["id"])

    def test_delete_on_empty_repository(self, service):
        with pytest.raises(TodoNotFoundError):
            service.delete_todo(999)

    def test_list_order(self, service):
        for text in ("A", "B", "C"):
            service.create_todo(text)
        assert [t["text"] for t in service.get_all_todos()] == ["C", "B", "A"]
