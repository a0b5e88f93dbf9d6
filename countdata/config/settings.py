"""
Application settings.

Responsibilities:
- Read configuration once from the environment (after loading .env).
- Provide defaults for optional settings.
- Expose typed, immutable settings (API key, database URL, TLS, host/port)
  to the database client and API server.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field

from sqlalchemy.engine import make_url

from countdata.config.env import (
    env_bool,
    env_int,
    env_list,
    env_str,
    load_countdata_env,
)

DEFAULT_SQLITE_PATH = "countdata.db"
DEFAULT_SSL_CA_PATH = "./certs/ca.pem"
DEFAULT_SSL_MODE = "verify-full"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 5000


def normalize_database_url(url: str) -> str:
    """Map the libpq-style postgres:// scheme to the one SQLAlchemy expects."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration; set at startup and immutable thereafter."""

    api_key: str
    database_url: str
    ssl_ca_path: str = DEFAULT_SSL_CA_PATH
    ssl_mode: str = DEFAULT_SSL_MODE
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    create_table_on_startup: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def is_postgres(self) -> bool:
        return self.database_url.startswith("postgresql")

    @property
    def database_label(self) -> str:
        """Host, port and database name (or the SQLite path); never credentials or query."""
        url = make_url(self.database_url)
        if not url.host:
            return url.database or ""
        host = f"{url.host}:{url.port}" if url.port else url.host
        return f"{host}/{url.database or ''}"


def _database_url() -> str:
    """DATABASE_URL / COUNTDATA_DB_URL if set; else SQLite from COUNTDATA_DB_PATH or default."""
    url = env_str("COUNTDATA_DB_URL", "DATABASE_URL")
    if url:
        return normalize_database_url(url)
    path = env_str("COUNTDATA_DB_PATH", default=DEFAULT_SQLITE_PATH)
    return f"sqlite:///{path}"


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings.

    Read once per process; call reset_settings_cache() to re-read the environment.
    """
    load_countdata_env()
    return Settings(
        api_key=env_str("API_KEY"),
        database_url=_database_url(),
        ssl_ca_path=env_str("DB_SSL_CA_PATH", default=DEFAULT_SSL_CA_PATH),
        ssl_mode=env_str("DB_SSL_MODE", default=DEFAULT_SSL_MODE),
        api_host=env_str("API_HOST", default=DEFAULT_API_HOST),
        api_port=env_int("API_PORT", DEFAULT_API_PORT),
        create_table_on_startup=env_bool("CREATE_TABLE_ON_STARTUP"),
        cors_origins=env_list("CORS_ORIGINS", ["*"]),
        log_level=env_str("LOG_LEVEL", default="INFO").upper(),
    )


def reset_settings_cache() -> None:
    """Forget cached settings. For tests only."""
    get_settings.cache_clear()
