"""
Pytest fixtures for CountData tests. Uses a temporary SQLite DB in place of PostgreSQL.
"""

from __future__ import annotations

import pytest

API_KEY = "test-secret-key"


@pytest.fixture
def empty_db(tmp_path, monkeypatch):
    """
    Point the store at a temporary SQLite DB without creating the table.
    DATABASE_URL is set empty (not unset) so a local .env cannot override it.
    Settings and engine caches are reset so each test gets a fresh DB.
    """
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("COUNTDATA_DB_URL", "")
    monkeypatch.setenv("COUNTDATA_DB_PATH", str(tmp_path / "countdata.db"))
    monkeypatch.setenv("API_KEY", API_KEY)
    monkeypatch.setenv("CREATE_TABLE_ON_STARTUP", "")

    from countdata.config import reset_settings_cache
    from countdata.database import count_store, reset_engine

    reset_settings_cache()
    reset_engine()
    yield count_store
    reset_engine()
    reset_settings_cache()


@pytest.fixture
def count_db(empty_db):
    """Temporary DB with count_data_table created."""
    empty_db.init_table()
    return empty_db


@pytest.fixture
def client(count_db):
    """FastAPI TestClient. Depends on count_db so the temp DB is set before the app runs."""
    from fastapi.testclient import TestClient

    from countdata.api_server.server import app

    return TestClient(app)


@pytest.fixture
def bare_client(empty_db):
    """TestClient over a DB whose table has not been created yet."""
    from fastapi.testclient import TestClient

    from countdata.api_server.server import app

    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}
