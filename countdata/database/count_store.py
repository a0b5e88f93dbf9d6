"""
CRUD operations over count_data_table.

Each function opens its own session and maps failures to the API error kinds:
RecordNotFound for a missing date, BackendFailure for any database error or
unparseable date. Errors are logged here; callers only see the generic message.
No retries are attempted.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from countdata.core.exceptions import BackendFailure, RecordNotFound
from countdata.count_logging import get_logger
from countdata.database.connection import get_engine, session_scope
from countdata.database.dates import format_date, parse_date
from countdata.database.models import Base, CountRecord

logger = get_logger(__name__)

INIT_FAILED = "Error creating one or more tables."
INSERT_FAILED = "Failed to insert data"
RETRIEVE_FAILED = "Failed to retrieve data"
UPDATE_FAILED = "Failed to update data"
DELETE_FAILED = "Failed to delete data"

NO_DATA_FOR_DATE = "No data found for this date"
NO_RECORD_FOR_DATE = "No record found for this date"


def _parse(date_str: str, event: str, failure: str) -> date:
    try:
        return parse_date(date_str)
    except ValueError as e:
        logger.warning(event, date=date_str, error=str(e))
        raise BackendFailure(failure) from e


def init_table() -> None:
    """
    Create count_data_table if it does not exist.

    Never drops or alters an existing table, so it is safe to call repeatedly.
    """
    try:
        Base.metadata.create_all(bind=get_engine(), tables=[CountRecord.__table__])
    except SQLAlchemyError as e:
        logger.exception("count_table_init_failed", error=str(e))
        raise BackendFailure(INIT_FAILED) from e
    logger.info("count_table_ready", table=CountRecord.__tablename__)


def insert_record(date_str: str, tf_count: int, da_count: int) -> None:
    """Insert a new row. A duplicate date violates the primary key and becomes BackendFailure."""
    day = _parse(date_str, "count_insert_bad_date", INSERT_FAILED)
    try:
        with session_scope() as session:
            session.add(CountRecord(date=day, tf_count=tf_count, da_count=da_count))
            session.flush()
    except (SQLAlchemyError, OverflowError) as e:
        logger.exception("count_insert_failed", date=date_str, error=str(e))
        raise BackendFailure(INSERT_FAILED) from e
    logger.info("count_inserted", date=date_str, tf_count=tf_count, da_count=da_count)


def list_records() -> list[dict[str, Any]]:
    """Return every row ordered by date ascending; empty table gives []."""
    try:
        with session_scope() as session:
            rows = session.query(CountRecord).order_by(CountRecord.date).all()
            return [r.to_dict() for r in rows]
    except SQLAlchemyError as e:
        logger.exception("count_list_failed", error=str(e))
        raise BackendFailure(RETRIEVE_FAILED) from e


def get_record(date_str: str) -> dict[str, Any]:
    """Return the row for date_str or raise RecordNotFound."""
    day = _parse(date_str, "count_get_bad_date", RETRIEVE_FAILED)
    try:
        with session_scope() as session:
            row = session.get(CountRecord, day)
            record = row.to_dict() if row else None
    except SQLAlchemyError as e:
        logger.exception("count_get_failed", date=date_str, error=str(e))
        raise BackendFailure(RETRIEVE_FAILED) from e
    if record is None:
        raise RecordNotFound(NO_DATA_FOR_DATE)
    return record


def update_record(date_str: str, tf_count: int, da_count: int) -> dict[str, Any]:
    """
    Replace both counts for an existing date and return the updated row.

    The existence check and the update are separate statements in separate
    sessions. A concurrent delete in between is reported as RecordNotFound
    because the update then matches no row.
    """
    day = _parse(date_str, "count_update_bad_date", UPDATE_FAILED)
    try:
        with session_scope() as session:
            exists = session.query(CountRecord.date).filter(CountRecord.date == day).first()
        if exists is None:
            raise RecordNotFound(NO_RECORD_FOR_DATE)

        with session_scope() as session:
            matched = (
                session.query(CountRecord)
                .filter(CountRecord.date == day)
                .update({"tf_count": tf_count, "da_count": da_count}, synchronize_session=False)
            )
            if matched == 0:
                raise RecordNotFound(NO_RECORD_FOR_DATE)
            updated = session.get(CountRecord, day).to_dict()
    except (SQLAlchemyError, OverflowError) as e:
        logger.exception("count_update_failed", date=date_str, error=str(e))
        raise BackendFailure(UPDATE_FAILED) from e
    logger.info("count_updated", date=date_str, tf_count=tf_count, da_count=da_count)
    return updated


def delete_record(date_str: str) -> dict[str, str]:
    """Delete the row for date_str in one statement; return {"date": ...} or raise RecordNotFound."""
    day = _parse(date_str, "count_delete_bad_date", DELETE_FAILED)
    try:
        with session_scope() as session:
            deleted = (
                session.query(CountRecord)
                .filter(CountRecord.date == day)
                .delete(synchronize_session=False)
            )
    except SQLAlchemyError as e:
        logger.exception("count_delete_failed", date=date_str, error=str(e))
        raise BackendFailure(DELETE_FAILED) from e
    if deleted == 0:
        raise RecordNotFound(NO_RECORD_FOR_DATE)
    logger.info("count_deleted", date=date_str)
    return {"date": format_date(day)}


def ping() -> None:
    """Round-trip a trivial query so the liveness probe reflects database reachability."""
    try:
        with session_scope() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.exception("count_ping_failed", error=str(e))
        raise BackendFailure(RETRIEVE_FAILED) from e
