"""Task use cases."""

from task_manager.application.use_cases.tasks.task_operations import TaskService

__all__ = ["TaskService"]
