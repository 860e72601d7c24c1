from datetime import datetime, timedelta, timezone

import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.core.errors import (
    DuplicateTaskError,
    MalformedInputError,
    RequestValidationFailed,
    TaskNotFoundError,
)
from taskmanager.services.error_translator import (
    GENERIC_ERROR_MESSAGE,
    VALIDATION_FAILED_MESSAGE,
    error_response,
    translate_error,
)


@pytest.mark.parametrize(
    ("exc", "status", "label", "message"),
    [
        (TaskNotFoundError(42), 404, "Not Found", "Task with ID 42 not found"),
        (DuplicateTaskError(), 409, "Conflict", "You already have an active task with this title!"),
        (MalformedInputError("bad input"), 400, "Bad Request", "bad input"),
        (StarletteHTTPException(status_code=405, detail="Method Not Allowed"), 405, "Method Not Allowed", "Method Not Allowed"),
    ],
)
def test_domain_errors_map_to_status_label_and_message(exc, status, label, message):
    code, body = translate_error(exc)

    assert code == status
    assert body.status == status
    assert body.error == label
    assert body.message == message
    assert body.errors is None


def test_validation_failure_carries_field_map():
    code, body = translate_error(RequestValidationFailed({"title": "Title is required"}))

    assert code == 400
    assert body.error == "Bad Request"
    assert body.message == VALIDATION_FAILED_MESSAGE
    assert body.errors == {"title": "Title is required"}


def test_unexpected_error_never_leaks_message():
    code, body = translate_error(RuntimeError("password=hunter2 at db.internal"))

    assert code == 500
    assert body.error == "Internal Server Error"
    assert body.message == GENERIC_ERROR_MESSAGE
    assert "hunter2" not in body.model_dump_json()


def test_timestamp_is_taken_at_translation_time():
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    _, body = translate_error(TaskNotFoundError(1))

    assert before <= body.timestamp <= datetime.now(timezone.utc) + timedelta(seconds=1)


def test_request_validation_error_field_messages():
    exc = RequestValidationError(
        [
            {"type": "string_too_short", "loc": ("body", "title"), "msg": "too short", "input": "ab"},
            {"type": "string_too_long", "loc": ("body", "description"), "msg": "too long", "input": "x" * 501},
            {"type": "missing", "loc": ("body", "completed"), "msg": "Field required", "input": {}},
        ]
    )

    code, body = translate_error(exc)

    assert code == 400
    assert body.message == VALIDATION_FAILED_MESSAGE
    assert body.errors == {
        "title": "Title must be between 3 and 100 characters",
        "description": "Description cannot exceed 500 characters",
        "completed": "Completion status must be specified",
    }


def test_invalid_json_is_malformed_input():
    exc = RequestValidationError(
        [{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error", "input": {}}]
    )

    code, body = translate_error(exc)

    assert code == 400
    assert body.message == "Malformed JSON request body"
    assert body.errors is None


def test_error_response_omits_absent_errors_and_serializes_timestamp():
    resp = error_response(TaskNotFoundError(5))

    assert resp.status_code == 404
    assert b'"errors"' not in resp.body
    assert b'"timestamp"' in resp.body
