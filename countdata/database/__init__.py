"""
Database layer — count_data_table model, connection pool and CRUD store.

PostgreSQL over TLS in production; SQLite fallback for local runs and tests.
"""

from countdata.database.connection import get_engine, reset_engine, session_scope
from countdata.database.models import Base, CountRecord

__all__ = [
    "Base",
    "CountRecord",
    "get_engine",
    "reset_engine",
    "session_scope",
]
