"""
Application-level exceptions.

Each exception knows the HTTP status and JSON body the API returns for it,
so the store can raise and the server maps it in one exception handler.
"""

from __future__ import annotations

from typing import Any


class CountDataError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    body_key = "error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        return {self.body_key: self.message}


class AuthError(CountDataError):
    """Bad or missing API key."""

    status_code = 401
    default_message = "Invalid or missing API key"


class ValidationFailure(CountDataError):
    """Missing required input (query param or body field)."""

    status_code = 400
    default_message = "Invalid request"


class RecordNotFound(CountDataError):
    """No row for the requested date."""

    status_code = 404
    body_key = "message"
    default_message = "No record found for this date"


class BackendFailure(CountDataError):
    """
    Any database-side failure: connectivity, constraint violation, bad date.

    The client sees only the generic message; the cause is logged server-side.
    """

    status_code = 500
    default_message = "Database operation failed"
