"""
Tests for settings parsing and database connect args.
"""

from __future__ import annotations

import pytest

from countdata.config import Settings, get_settings, reset_settings_cache
from countdata.config.env import env_bool, env_int, env_list
from countdata.config.settings import normalize_database_url
from countdata.database.connection import build_connect_args


@pytest.fixture
def fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_normalize_postgres_scheme():
    assert normalize_database_url("postgres://u:p@db.example.com:5432/app") == (
        "postgresql://u:p@db.example.com:5432/app"
    )
    assert normalize_database_url("postgresql://h/app") == "postgresql://h/app"
    assert normalize_database_url("sqlite:///x.db") == "sqlite:///x.db"


def test_postgres_connect_args_verify_against_ca():
    settings = Settings(
        api_key="k",
        database_url="postgresql://u:p@db.example.com/app",
        ssl_ca_path="/etc/certs/ca.pem",
    )
    assert build_connect_args(settings) == {
        "sslmode": "verify-full",
        "sslrootcert": "/etc/certs/ca.pem",
    }


def test_sqlite_connect_args():
    settings = Settings(api_key="k", database_url="sqlite:///countdata.db")
    assert build_connect_args(settings) == {"check_same_thread": False}
    assert settings.is_postgres is False


def test_database_label_hides_credentials():
    settings = Settings(api_key="k", database_url="postgresql://user:pw@db.example.com:5432/app?sslmode=require")
    assert settings.database_label == "db.example.com:5432/app"


def test_database_label_with_reserved_chars_in_password():
    settings = Settings(api_key="k", database_url="postgresql://user:p?ss:w0rd@db.example.com/app?sslmode=require")
    assert settings.database_label == "db.example.com/app"
    assert "w0rd" not in settings.database_label


def test_database_label_for_sqlite():
    assert Settings(api_key="k", database_url="sqlite:////tmp/counts.db").database_label == "/tmp/counts.db"


def test_get_settings_from_env(monkeypatch, fresh_settings):
    monkeypatch.setenv("API_KEY", "abc")
    monkeypatch.setenv("COUNTDATA_DB_URL", "")
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@h:5432/d")
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("DB_SSL_CA_PATH", "/tmp/ca.pem")
    monkeypatch.setenv("CREATE_TABLE_ON_STARTUP", "yes")
    settings = get_settings()
    assert settings.api_key == "abc"
    assert settings.database_url == "postgresql://u:p@h:5432/d"
    assert settings.api_port == 8080
    assert settings.ssl_ca_path == "/tmp/ca.pem"
    assert settings.create_table_on_startup is True
    assert get_settings() is settings


def test_sqlite_fallback(monkeypatch, fresh_settings):
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("COUNTDATA_DB_URL", "")
    monkeypatch.setenv("COUNTDATA_DB_PATH", "/tmp/counts.db")
    assert get_settings().database_url == "sqlite:////tmp/counts.db"


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("X_INT", "not-a-number")
    with pytest.raises(ValueError, match="X_INT"):
        env_int("X_INT", 1)
    monkeypatch.setenv("X_BOOL", "On")
    assert env_bool("X_BOOL") is True
    monkeypatch.setenv("X_LIST", "https://a.example, ,https://b.example")
    assert env_list("X_LIST", ["*"]) == ["https://a.example", "https://b.example"]
    monkeypatch.delenv("X_MISSING", raising=False)
    assert env_list("X_MISSING", ["*"]) == ["*"]
