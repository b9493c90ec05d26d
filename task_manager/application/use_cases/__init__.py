"""Application use cases: one entry point per workflow."""

from task_manager.application.use_cases.tasks import TaskService

__all__ = ["TaskService"]
