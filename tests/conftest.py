"""
Shared fixtures: settings, a SQLite store in a temp file, and a test client.
"""

import logging
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import create_db_engine
from app.main import create_app
from app.services.student.sqlite import SQLiteStudentStorage

SETTINGS_ENV_VARS = ("CONFIG_PATH", "ENV", "STORAGE_PATH", "HTTP_SERVER_ADDR", "DB_ECHO_SQL")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces the root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell from leaking into settings."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_db_path(tmp_path) -> str:
    return str(tmp_path / "students.db")


@pytest.fixture
def settings(temp_db_path: str) -> Settings:
    return Settings(
        ENV="dev",
        STORAGE_PATH=temp_db_path,
        HTTP_SERVER_ADDR="localhost:8082",
    )


@pytest.fixture
def storage(temp_db_path: str) -> Generator[SQLiteStudentStorage, None, None]:
    store = SQLiteStudentStorage(create_db_engine(temp_db_path))
    yield store
    store.close()


@pytest.fixture
def client(settings: Settings, storage: SQLiteStudentStorage) -> Generator[TestClient, None, None]:
    app = create_app(settings, storage=storage)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_student() -> dict:
    return {"name": "Rakesh", "email": "rakesh@test.com", "age": 35}
