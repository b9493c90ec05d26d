"""Application DTOs."""

from task_manager.application.dtos.task import TaskListQuery

__all__ = ["TaskListQuery"]
