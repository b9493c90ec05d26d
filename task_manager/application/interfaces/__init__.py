"""Application interfaces (ports)."""

from task_manager.application.interfaces.repositories import PAGE_SIZE, ITaskRepository

__all__ = ["ITaskRepository", "PAGE_SIZE"]
