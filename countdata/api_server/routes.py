"""
API route definitions — CRUD over count records.

Mounted under /api; every route here sits behind the API key middleware.
Validates request params and delegates to the count store.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field, StrictInt

from countdata.core.exceptions import ValidationFailure
from countdata.database import count_store
from countdata.database.models import INT_MAX, INT_MIN

router = APIRouter(tags=["Counts"])

DATE_REQUIRED = "Date is required as query param"
ALL_FIELDS_REQUIRED = "Date, tf_count, and da_count are required"


class AddCountRequest(BaseModel):
    """POST /api/add body."""

    date: str | None = Field(None, description="Day in DD/MM/YYYY form", examples=["06/05/2025"])
    tf_count: StrictInt | None = Field(None, ge=INT_MIN, le=INT_MAX, description="TF counter")
    da_count: StrictInt | None = Field(None, ge=INT_MIN, le=INT_MAX, description="DA counter")


class UpdateCountRequest(BaseModel):
    """PUT /api/update body. Both counts are replaced."""

    tf_count: StrictInt | None = Field(None, ge=INT_MIN, le=INT_MAX, description="New TF counter")
    da_count: StrictInt | None = Field(None, ge=INT_MIN, le=INT_MAX, description="New DA counter")


class CountRecordResponse(BaseModel):
    date: str = Field(..., description="Day in DD/MM/YYYY form")
    tf_count: int | None
    da_count: int | None


class MessageResponse(BaseModel):
    message: str


class UpdateResponse(BaseModel):
    message: str
    updated: CountRecordResponse


class DeletedDate(BaseModel):
    date: str


class DeleteResponse(BaseModel):
    message: str
    deleted: DeletedDate


def _require_date(date: str | None) -> str:
    if not date:
        raise ValidationFailure(DATE_REQUIRED)
    return date


@router.get("", response_model=MessageResponse)
def status() -> dict[str, str]:
    """Liveness probe behind the API key; also checks the database answers."""
    count_store.ping()
    return {"message": "Server Online"}


@router.post("/add", response_model=MessageResponse)
def add_count(body: AddCountRequest) -> dict[str, str]:
    """Insert a new record. Duplicate dates fail with 500."""
    if not body.date or body.tf_count is None or body.da_count is None:
        raise ValidationFailure(ALL_FIELDS_REQUIRED)
    count_store.insert_record(body.date, body.tf_count, body.da_count)
    return {"message": "Data inserted successfully"}


@router.get("/all/data", response_model=list[CountRecordResponse])
def all_counts() -> list[dict[str, Any]]:
    """Every record, ascending by date."""
    return count_store.list_records()


@router.get("/data", response_model=CountRecordResponse)
def get_count(date: str | None = None) -> dict[str, Any]:
    """One record by ?date=DD/MM/YYYY."""
    return count_store.get_record(_require_date(date))


@router.put("/update", response_model=UpdateResponse)
def update_count(body: UpdateCountRequest, date: str | None = None) -> dict[str, Any]:
    """
    Replace tf_count and da_count for ?date=DD/MM/YYYY.

    Zero is a valid count; only absent or null counts are rejected.
    """
    if not date or body.tf_count is None or body.da_count is None:
        raise ValidationFailure(ALL_FIELDS_REQUIRED)
    updated = count_store.update_record(date, body.tf_count, body.da_count)
    return {"message": "Data updated successfully", "updated": updated}


@router.delete("/delete", response_model=DeleteResponse)
def delete_count(date: str | None = None) -> dict[str, Any]:
    """Delete the record for ?date=DD/MM/YYYY."""
    deleted = count_store.delete_record(_require_date(date))
    return {"message": "Record deleted successfully", "deleted": deleted}
