"""
DD/MM/YYYY date codec used at the API boundary.

Storage uses native DATE values; clients always see day first, then month.
"""

from __future__ import annotations

from datetime import date, datetime

DATE_FORMAT = "%d/%m/%Y"


def parse_date(value: str) -> date:
    """
    Parse 'DD/MM/YYYY' into a date. '06/05/2025' is 6 May 2025.

    Raises ValueError for anything else (including non-strings).
    """
    if not isinstance(value, str):
        raise ValueError(f"date must be a DD/MM/YYYY string, got {type(value).__name__}")
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Render a date as 'DD/MM/YYYY'."""
    return value.strftime(DATE_FORMAT)
