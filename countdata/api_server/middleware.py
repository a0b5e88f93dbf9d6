"""
HTTP middleware — API key check and request logging.

The key check runs before routing and body parsing, so a request without a
valid key never reaches a handler, whatever else is wrong with it.
"""

from __future__ import annotations

import hmac
import time
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from countdata.config import get_settings
from countdata.core.exceptions import AuthError
from countdata.count_logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-api-key"
API_KEY_QUERY_PARAM = "api_key"
PROTECTED_PREFIX = "/api"
REQUEST_ID_HEADER = "x-request-id"

CallNext = Callable[[Request], Awaitable[Response]]


def is_protected_path(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


def extract_api_key(request: Request) -> str | None:
    """Header first, then query param; an empty header falls through to the query."""
    return request.headers.get(API_KEY_HEADER) or request.query_params.get(API_KEY_QUERY_PARAM)


def api_key_matches(candidate: str | None, secret: str) -> bool:
    """Exact match against the configured secret. An unset secret matches nothing."""
    if not secret or candidate is None:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


async def api_key_middleware(request: Request, call_next: CallNext) -> Response:
    if is_protected_path(request.url.path):
        candidate = extract_api_key(request)
        if not api_key_matches(candidate, get_settings().api_key):
            logger.warning(
                "api_key_rejected",
                key_present=candidate is not None,
            )
            err = AuthError()
            return JSONResponse(status_code=err.status_code, content=err.to_body())
    return await call_next(request)


async def request_logging_middleware(request: Request, call_next: CallNext) -> Response:
    """
    Bind request_id, method and path for every event logged during the request,
    then log status and latency. The query string is not logged (it may carry the key).
    """
    request_id = bind_request_context(
        request.method,
        request.url.path,
        request.headers.get(REQUEST_ID_HEADER),
    )
    start = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http_request",
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
    finally:
        clear_request_context()
