"""
FastAPI server — CRUD API over count_data_table.

GET /create initializes the table (no key). Everything under /api requires
the shared API key (x-api-key header or api_key query param).
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from countdata import __version__
from countdata.api_server.middleware import api_key_middleware, request_logging_middleware
from countdata.api_server.routes import MessageResponse, router as counts_router
from countdata.config import get_settings
from countdata.core.exceptions import BackendFailure, CountDataError, ValidationFailure
from countdata.count_logging import get_logger
from countdata.database import count_store, reset_engine

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Lifespan: optional table init, pool disposal on shutdown
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "api_starting",
        database=settings.database_label,
        api_key_configured=bool(settings.api_key),
    )
    if not settings.api_key:
        logger.warning("api_key_missing", message="API_KEY is not set; all /api routes will answer 401")
    if settings.create_table_on_startup:
        try:
            count_store.init_table()
        except BackendFailure as e:
            logger.warning("startup_table_init_skip", error=str(e))

    yield

    reset_engine()
    logger.info("api_stopped")


# -----------------------------------------------------------------------------
# App and middleware
# -----------------------------------------------------------------------------

app = FastAPI(
    title="CountData API",
    description="Key-protected CRUD API over daily tf/da counters.",
    version=__version__,
    lifespan=lifespan,
)

# Registration order matters: the last one added runs first.
app.middleware("http")(api_key_middleware)
app.middleware("http")(request_logging_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(counts_router, prefix="/api")


@app.get("/create", response_model=MessageResponse, tags=["Admin"])
def create_table() -> dict[str, str]:
    """Create count_data_table if it does not exist. Idempotent; never drops data."""
    count_store.init_table()
    return {"message": "Table created or already exists."}


# -----------------------------------------------------------------------------
# Error responses
# -----------------------------------------------------------------------------


@app.exception_handler(CountDataError)
def countdata_error_handler(request: Request, exc: CountDataError) -> JSONResponse:
    """Map domain errors to their status code and JSON body."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields: 400 instead of FastAPI's 422."""
    fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
    logger.info("request_validation_failed", path=request.url.path, fields=fields)
    err = ValidationFailure("Invalid request body")
    return JSONResponse(status_code=err.status_code, content=err.to_body())
