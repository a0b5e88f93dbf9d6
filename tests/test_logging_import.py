"""
Test that count_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from count_logging and use the logger."""
    from countdata.count_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "exception")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_event_type_renames_event():
    from countdata.count_logging.logger import _event_type

    out = _event_type(None, "info", {"event": "count_inserted", "date": "01/01/2025"})
    assert out["event_type"] == "count_inserted"
    assert out["message"] == "count_inserted"
    assert "event" not in out


def test_secrets_are_masked():
    from countdata.count_logging.logger import _mask_secrets

    out = _mask_secrets(None, "info", {"event": "x", "api_key": "s3cret", "date": "01/01/2025"})
    assert out["api_key"] == "***"
    assert out["date"] == "01/01/2025"


def test_request_context_is_merged_into_events():
    import structlog

    from countdata.count_logging import bind_request_context, clear_request_context

    request_id = bind_request_context("POST", "/api/add", "req-1")
    try:
        event = structlog.contextvars.merge_contextvars(None, "info", {"event": "count_insert_failed"})
    finally:
        clear_request_context()
    assert request_id == "req-1"
    assert event["request_id"] == "req-1"
    assert event["method"] == "POST"
    assert event["path"] == "/api/add"
    assert structlog.contextvars.get_contextvars() == {}


class _RecordingLogger:
    """Stands in for a module logger; keeps each event with the context bound at call time."""

    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def _record(self, event, **kw):
        import structlog

        self.events.append((event, {**structlog.contextvars.get_contextvars(), **kw}))

    info = warning = debug = exception = _record


def test_store_failure_logged_with_request_context(client, auth_headers, monkeypatch):
    """A store error raised under POST /api/add is logged with that request's method, path and id."""
    from countdata.database import count_store

    body = {"date": "01/01/2025", "tf_count": 1, "da_count": 1}
    assert client.post("/api/add", json=body, headers=auth_headers).status_code == 200

    recorder = _RecordingLogger()
    monkeypatch.setattr(count_store, "logger", recorder)
    r = client.post("/api/add", json=body, headers={**auth_headers, "x-request-id": "dup-1"})
    assert r.status_code == 500
    assert r.headers["x-request-id"] == "dup-1"

    failures = [fields for event, fields in recorder.events if event == "count_insert_failed"]
    assert len(failures) == 1
    assert failures[0]["method"] == "POST"
    assert failures[0]["path"] == "/api/add"
    assert failures[0]["request_id"] == "dup-1"


def test_response_carries_generated_request_id(client, auth_headers):
    r = client.get("/api", headers=auth_headers)
    assert len(r.headers["x-request-id"]) == 32
