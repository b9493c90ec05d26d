"""Task API: thin routes delegating to TaskService."""

from typing import Annotated

from fastapi import APIRouter, Depends

from task_manager.api.dependencies import (
    decode_task_request,
    get_list_query,
    get_task_service,
)
from task_manager.application.dtos.task import TaskListQuery
from task_manager.application.use_cases.tasks import TaskService
from task_manager.domain.entities.task import TaskRequest
from task_manager.schemas.responses import ErrorResponse, MessageResponse
from task_manager.schemas.task import TaskResponse

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Malformed input"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}
_WRITE_ERRORS = {
    **_ERRORS,
    409: {"model": ErrorResponse, "description": "Due date rejected by storage"},
    422: {"model": ErrorResponse, "description": "Missing or empty field"},
}
_NOT_FOUND = {404: {"model": MessageResponse, "description": "No live task with this id"}}


@router.post(
    "/task", response_model=TaskResponse, status_code=201, responses=_WRITE_ERRORS
)
async def create_task(
    body: Annotated[TaskRequest, Depends(decode_task_request)],
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task; the id is generated server side."""
    task = await task_svc.create_task(body)
    return TaskResponse.from_task(task)


@router.get(
    "/task/{task_id}",
    response_model=TaskResponse,
    responses={**_ERRORS, **_NOT_FOUND},
)
async def get_task(
    task_id: str,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Get one live task by id."""
    task = await task_svc.get_task(task_id)
    return TaskResponse.from_task(task)


@router.put(
    "/task/{task_id}",
    response_model=TaskResponse,
    responses={**_WRITE_ERRORS, **_NOT_FOUND},
)
async def update_task(
    task_id: str,
    body: Annotated[TaskRequest, Depends(decode_task_request)],
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Replace all fields of a live task."""
    task = await task_svc.update_task(task_id, body)
    return TaskResponse.from_task(task)


@router.delete(
    "/task/{task_id}",
    response_model=MessageResponse,
    responses={**_ERRORS, **_NOT_FOUND},
)
async def delete_task(
    task_id: str,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Soft-delete a live task."""
    await task_svc.delete_task(task_id)
    return MessageResponse(message="success")


@router.get("/tasks", response_model=list[TaskResponse], responses=_ERRORS)
async def list_tasks(
    query: Annotated[TaskListQuery, Depends(get_list_query)],
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """List live tasks ordered by due date, ten per page.

    Optional filters: status (boolean), date (YYYY-MM-DD), page (from 0).
    """
    tasks = await task_svc.list_tasks(query)
    return [TaskResponse.from_task(task) for task in tasks]
