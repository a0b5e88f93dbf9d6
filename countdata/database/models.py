"""
Table model for count_data_table: one row per calendar date.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column, Date, Integer
from sqlalchemy.orm import declarative_base

from countdata.database.dates import format_date

Base = declarative_base()

TABLE_NAME = "count_data_table"

# Range of the INT columns
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class CountRecord(Base):
    """Date-keyed pair of counters. Both counts are written together."""

    __tablename__ = TABLE_NAME

    date = Column(Date, primary_key=True)
    tf_count = Column(Integer)
    da_count = Column(Integer)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_date(self.date),
            "tf_count": self.tf_count,
            "da_count": self.da_count,
        }

    def __repr__(self) -> str:
        return f"CountRecord(date={self.date!r}, tf_count={self.tf_count}, da_count={self.da_count})"
