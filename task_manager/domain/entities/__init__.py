"""Domain entities."""

from task_manager.domain.entities.task import Task, TaskRequest

__all__ = ["Task", "TaskRequest"]
