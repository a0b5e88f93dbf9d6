"""
Database connection and session management.

- One SQLAlchemy engine per process, created lazily and shared by all requests;
  the pool hands out a connection per session and takes it back on close.
- PostgreSQL connections are TLS-encrypted and the server certificate is checked
  against the configured CA bundle (DB_SSL_CA_PATH, DB_SSL_MODE).
- Without DATABASE_URL the engine falls back to a local SQLite file.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from countdata.config import Settings, get_settings
from countdata.count_logging import get_logger

logger = get_logger(__name__)

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None
_lock = threading.Lock()


def build_connect_args(settings: Settings) -> dict[str, Any]:
    """Driver connect args: TLS verification for PostgreSQL, thread sharing for SQLite."""
    if settings.is_postgres:
        return {
            "sslmode": settings.ssl_mode,
            "sslrootcert": settings.ssl_ca_path,
        }
    if settings.database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def get_engine() -> Engine:
    """Create or return the cached engine."""
    global _engine
    if _engine is None:
        with _lock:
            if _engine is None:
                settings = get_settings()
                _engine = create_engine(
                    settings.database_url,
                    connect_args=build_connect_args(settings),
                    pool_pre_ping=True,
                )
                logger.info(
                    "db_engine_created",
                    database=settings.database_label,
                    tls=settings.is_postgres,
                )
    return _engine


def _get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


@contextmanager
def session_scope() -> Iterator[Session]:
    """Context manager for a single session. Commits on success, rolls back on error."""
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose the pool and clear the cached engine and session factory."""
    global _engine, _SessionLocal
    with _lock:
        if _engine is not None:
            _engine.dispose()
        _engine = None
        _SessionLocal = None
