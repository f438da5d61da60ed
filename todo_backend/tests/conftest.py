import os

import pytest
from fastapi.testclient import TestClient

# Never touch the default on-disk database while importing the app module
os.environ.setdefault("DB_PATH", "memory")

from src.api.db import SQLiteRepository  # noqa: E402
from src.api.main import create_app  # noqa: E402
from src.api.repositories import InMemoryRepository  # noqa: E402
from src.api.service import TodoService  # noqa: E402
from src.api.settings import Settings  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "data" / "todos.db")


@pytest.fixture
def sqlite_repo(db_path):
    repo = SQLiteRepository(db_path)
    yield repo
    repo.close()


@pytest.fixture(params=["memory", "sqlite"])
def repo(request, tmp_path):
    """Each contract test runs once per storage backend."""
    if request.param == "memory":
        yield InMemoryRepository()
        return
    repository = SQLiteRepository(str(tmp_path / "contract.db"))
    yield repository
    repository.close()


@pytest.fixture
def service(repo):
    return TodoService(repo)


@pytest.fixture
def client():
    app = create_app(Settings(db_path="memory", enable_test_routes=True))
    with TestClient(app) as test_client:
        yield test_client
