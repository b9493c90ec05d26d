"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Each domain exception class
has its own handler (matched by type) that picks the HTTP status and the
response envelope. Internal detail is logged, never returned.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_manager.domain.exceptions import (
    BadDateFormatError,
    BadJsonError,
    BadQueryParamError,
    DateConstraintViolation,
    InvalidJsonError,
    StorageError,
    TaskNotFoundError,
)
from task_manager.schemas.responses import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, param: str = "", value: str = "") -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(param=param, value=value, error=error).render(),
    )


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).render(),
    )


def _bad_json_handler(request: Request, exc: BadJsonError) -> JSONResponse:
    logger.warning("Rejected body on %s %s: %s", request.method, request.url.path, exc.message)
    return _error(400, "bad JSON")


def _invalid_json_handler(request: Request, exc: InvalidJsonError) -> JSONResponse:
    logger.warning("Rejected body on %s %s: %s", request.method, request.url.path, exc.message)
    return _error(422, "invalid JSON")


def _bad_date_format_handler(request: Request, exc: BadDateFormatError) -> JSONResponse:
    logger.warning("Rejected date on %s %s: %r", request.method, request.url.path, exc.value)
    return _error(400, "bad date format", param=exc.param, value=exc.value)


def _bad_query_param_handler(request: Request, exc: BadQueryParamError) -> JSONResponse:
    logger.warning("Rejected query parameter %s=%r", exc.param, exc.value)
    return _error(400, exc.error, param=exc.param, value=exc.value)


def _not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    logger.warning("Task not found: %s", exc.task_id, extra={"task_id": exc.task_id})
    return _message(404, "invalid task id")


def _date_conflict_handler(request: Request, exc: DateConstraintViolation) -> JSONResponse:
    logger.warning("Due date rejected by storage: %s", exc.due_date)
    return _error(409, "bad date", param="date", value=exc.due_date)


def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Return 500 action fail. The cause was logged with traceback by the repository."""
    return _error(500, "action fail", param="id", value=exc.task_id or "")


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Framework-level validation failure (path/query typing); same shape as missing fields."""
    logger.warning("Request validation failed: %s", exc.errors())
    return _error(422, "invalid JSON")


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return {"message": detail} for Starlette HTTP exceptions (unknown route, bad method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=MessageResponse(message=str(exc.detail).lower()).render(),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 action fail without internal detail."""
    logger.exception("Unhandled exception: %s", exc)
    return _error(500, "action fail", param="id")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: each request and storage
    exception, RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(BadJsonError, _bad_json_handler)
    app.add_exception_handler(InvalidJsonError, _invalid_json_handler)
    app.add_exception_handler(BadDateFormatError, _bad_date_format_handler)
    app.add_exception_handler(BadQueryParamError, _bad_query_param_handler)
    app.add_exception_handler(TaskNotFoundError, _not_found_handler)
    app.add_exception_handler(DateConstraintViolation, _date_conflict_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
