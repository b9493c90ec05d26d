"""Task dependencies: service wiring and the request pipeline.

decode_task_request and get_list_query run before the endpoint body, so a
rejected request never reaches the service or storage. Checks happen in a
fixed order and the first failure wins.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request
from pydantic import ValidationError

from task_manager.application.dtos.task import TaskListQuery
from task_manager.application.interfaces.repositories import ITaskRepository
from task_manager.application.use_cases.tasks import TaskService
from task_manager.domain.entities.task import TaskRequest
from task_manager.domain.exceptions import (
    BadDateFormatError,
    BadJsonError,
    BadQueryParamError,
    InvalidJsonError,
)
from task_manager.schemas.task import TaskRequestBody
from task_manager.shared.utils.parsing import (
    is_valid_date,
    parse_bool,
    parse_page,
)

from . import db as db_deps


async def get_task_service(
    task_repo: Annotated[ITaskRepository, Depends(db_deps.get_task_repository)],
) -> TaskService:
    """Task service over the request-scoped repository."""
    return TaskService(task_repo)


def parse_task_body(raw: bytes | str) -> TaskRequest:
    """Decode and validate a create/update body.

    Raises:
        BadJsonError: Not JSON, not an object, or a field of the wrong JSON type.
        InvalidJsonError: title, description or due_date missing/empty, or status missing/null.
        BadDateFormatError: due_date is not an exact YYYY-MM-DD calendar date.
    """
    try:
        body = TaskRequestBody.model_validate_json(raw)
    except ValidationError as e:
        raise BadJsonError(e.errors()[0]["msg"]) from e
    missing = body.missing_fields()
    if missing:
        raise InvalidJsonError(missing)
    request = body.to_request()
    if not is_valid_date(request.due_date):
        raise BadDateFormatError(request.due_date)
    return request


async def decode_task_request(request: Request) -> TaskRequest:
    """Request body -> TaskRequest (see parse_task_body)."""
    return parse_task_body(await request.body())


def get_list_query(
    status: Annotated[str, Query()] = "",
    date: Annotated[str, Query()] = "",
    page: Annotated[str, Query()] = "",
) -> TaskListQuery:
    """Validate list query parameters in order date, status, page.

    Empty or absent parameters impose no constraint (page defaults to 0).
    """
    due_date: str | None = None
    if date:
        if not is_valid_date(date):
            raise BadDateFormatError(date)
        due_date = date

    done: bool | None = None
    if status:
        try:
            done = parse_bool(status)
        except ValueError as e:
            raise BadQueryParamError("status", status, "bad status") from e

    page_number = 0
    if page:
        try:
            page_number = parse_page(page)
        except ValueError as e:
            raise BadQueryParamError("page", page, "bad page") from e

    return TaskListQuery(page=page_number, due_date=due_date, status=done)
