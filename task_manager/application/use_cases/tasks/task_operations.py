"""Task operations: create, get, update, delete, list (delegate to ITaskRepository)."""

from __future__ import annotations

import logging

from task_manager.application.dtos.task import TaskListQuery
from task_manager.application.interfaces.repositories import ITaskRepository
from task_manager.domain.entities.task import Task, TaskRequest

logger = logging.getLogger(__name__)


class TaskService:
    """Orchestrates task use cases over the storage port.

    Input is already validated by the request pipeline. Storage exceptions
    propagate unchanged; the presentation layer maps them to HTTP responses.
    Holds no state between calls.
    """

    def __init__(self, task_repo: ITaskRepository) -> None:
        self.task_repo = task_repo

    async def create_task(self, request: TaskRequest) -> Task:
        """Create a task; the repository assigns the id."""
        task = await self.task_repo.create(request)
        logger.info("Task created", extra={"task_id": task.id})
        return task

    async def get_task(self, task_id: str) -> Task:
        """Return the live task or raise TaskNotFoundError."""
        task = await self.task_repo.get_by_id(task_id)
        logger.info("Task retrieved", extra={"task_id": task_id})
        return task

    async def update_task(self, task_id: str, request: TaskRequest) -> Task:
        """Replace all mutable fields of the live task."""
        task = await self.task_repo.update(request, task_id)
        logger.info("Task updated", extra={"task_id": task_id})
        return task

    async def delete_task(self, task_id: str) -> None:
        """Soft-delete the live task. A second delete raises TaskNotFoundError."""
        await self.task_repo.delete(task_id)
        logger.info("Task deleted", extra={"task_id": task_id})

    async def list_tasks(self, query: TaskListQuery) -> list[Task]:
        """Return one page of live tasks; an empty page is a valid result."""
        tasks = await self.task_repo.list_tasks(
            page=query.page,
            due_date=query.due_date,
            status=query.status,
        )
        if not tasks:
            logger.info(
                "No tasks found (page=%s, date=%s, status=%s)",
                query.page,
                query.due_date,
                query.status,
            )
        else:
            logger.info("Tasks listed: %d", len(tasks))
        return tasks
