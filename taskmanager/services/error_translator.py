"""
Single place where failures become HTTP error bodies.

  TaskNotFoundError          -> 404 Not Found
  field validation failures  -> 400 Bad Request (+ errors map)
  malformed input            -> 400 Bad Request
  DuplicateTaskError         -> 409 Conflict
  anything else              -> 500 Internal Server Error (generic message only)
"""
from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.core.errors import (
    DuplicateTaskError,
    MalformedInputError,
    RequestValidationFailed,
    TaskManagerError,
    TaskNotFoundError,
)
from taskmanager.schemas.task import (
    COMPLETED_REQUIRED,
    DESCRIPTION_LENGTH,
    TITLE_LENGTH,
    TITLE_REQUIRED,
    ErrorResponse,
)

log = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."
VALIDATION_FAILED_MESSAGE = "Validation failed for one or more fields"


def _body(
    status: int,
    message: str,
    errors: Optional[Dict[str, str]] = None,
) -> Tuple[int, ErrorResponse]:
    try:
        label = HTTPStatus(status).phrase
    except ValueError:
        label = "Error"
    return status, ErrorResponse(status=status, error=label, message=message, errors=errors)


def _field_message(field: str, err: Dict[str, Any]) -> str:
    etype = err.get("type")
    value = err.get("input")

    if field == "title":
        if etype == "missing" or value is None or (isinstance(value, str) and not value.strip()):
            return TITLE_REQUIRED
        if etype in ("string_too_short", "string_too_long"):
            return TITLE_LENGTH
    elif field == "description" and etype == "string_too_long":
        return DESCRIPTION_LENGTH
    elif field == "completed" and (etype == "missing" or value is None):
        return COMPLETED_REQUIRED

    if etype == "value_error":
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
    return str(err.get("msg", "Invalid value"))


def _translate_request_validation(exc: RequestValidationError) -> Tuple[int, ErrorResponse]:
    field_errors: Dict[str, str] = {}

    for err in exc.errors():
        loc = tuple(err.get("loc") or ())
        etype = err.get("type")

        if etype == "json_invalid":
            return _body(400, "Malformed JSON request body")
        if loc and loc[0] == "path":
            name = loc[1] if len(loc) > 1 else "?"
            return _body(400, f"Invalid path parameter '{name}': {err.get('msg')}")
        if loc == ("body",):
            if etype == "missing":
                return _body(400, "Request body is required")
            return _body(400, f"Malformed request body: {err.get('msg')}")

        field = ".".join(str(p) for p in loc[1:]) or str(loc[0] if loc else "request")
        # 같은 필드에 여러 오류가 있으면 첫 번째만
        field_errors.setdefault(field, _field_message(field, err))

    return _body(400, VALIDATION_FAILED_MESSAGE, field_errors)


def translate_error(exc: BaseException) -> Tuple[int, ErrorResponse]:
    """Map a failure to (status code, error body). Timestamp is taken now."""
    if isinstance(exc, TaskNotFoundError):
        return _body(404, exc.message)
    if isinstance(exc, RequestValidationFailed):
        return _body(400, exc.message, exc.errors)
    if isinstance(exc, RequestValidationError):
        return _translate_request_validation(exc)
    if isinstance(exc, MalformedInputError):
        return _body(400, exc.message)
    if isinstance(exc, DuplicateTaskError):
        return _body(409, exc.message)
    if isinstance(exc, StarletteHTTPException):
        return _body(exc.status_code, str(exc.detail))
    return _body(500, GENERIC_ERROR_MESSAGE)


def error_response(exc: BaseException) -> JSONResponse:
    status, body = translate_error(exc)
    return JSONResponse(
        status_code=status,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def register_error_handlers(app: FastAPI) -> None:
    async def _handle(request: Request, exc: Exception) -> JSONResponse:
        if isinstance(exc, TaskManagerError):
            log.info("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc)
        return error_response(exc)

    app.add_exception_handler(TaskManagerError, _handle)
    app.add_exception_handler(RequestValidationError, _handle)
    app.add_exception_handler(StarletteHTTPException, _handle)

    @app.middleware("http")
    async def unexpected_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            log.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(exc)
