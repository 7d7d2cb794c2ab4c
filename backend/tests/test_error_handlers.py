import logging

import pytest
from fastapi import HTTPException

from exceptions import (
    AuthError,
    AuthorizationError,
    NotFoundError,
    PayloadTooLargeError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from utils.error_handlers import handle_api_errors, to_http_exception
from utils.logging_utils import log_operation


@pytest.mark.parametrize("error,status", [
    (ValidationError("bad header"), 400),
    (PayloadTooLargeError(10), 413),
    (AuthError("Couldn't find JWT"), 401),
    (AuthorizationError("v1", "u2"), 403),
    (NotFoundError("v1"), 404),
    (StorageError("commit", "S3 down"), 500),
    (PersistenceError("update_video", "locked"), 500),
    (RuntimeError("boom"), 500),
])
def test_status_categories(error, status):
    assert to_http_exception("Upload", error).status_code == status


def test_payload_too_large_reports_ceiling():
    error = PayloadTooLargeError(10)

    assert isinstance(error, ValidationError)
    assert error.details == {"max_bytes": 10}


def test_decorator_converts_application_errors():
    @handle_api_errors("Upload")
    def route():
        raise NotFoundError("v1")

    with pytest.raises(HTTPException) as exc_info:
        route()
    assert exc_info.value.status_code == 404


def test_decorator_passes_http_exceptions_through():
    @handle_api_errors("Upload")
    def route():
        raise HTTPException(status_code=418)

    with pytest.raises(HTTPException) as exc_info:
        route()
    assert exc_info.value.status_code == 418


def test_log_operation_records_identifiers(caplog):
    @log_operation("upload_thumbnail")
    def upload(video_id, requester_id, payload):
        return "ok"

    with caplog.at_level(logging.INFO):
        assert upload("v1", requester_id="u1", payload=b"") == "ok"

    starting = next(r for r in caplog.records if r.getMessage().startswith("Starting upload_thumbnail"))
    assert starting.video_id == "v1"
    assert starting.requester_id == "u1"
    assert any(r.getMessage().startswith("Completed upload_thumbnail") for r in caplog.records)


def test_log_operation_logs_failures(caplog):
    @log_operation("upload_video")
    def upload(video_id):
        raise NotFoundError(video_id)

    with caplog.at_level(logging.INFO), pytest.raises(NotFoundError):
        upload("v9")

    failed = next(r for r in caplog.records if r.getMessage().startswith("Failed upload_video"))
    assert failed.error_type == "NotFoundError"
    assert failed.video_id == "v9"
