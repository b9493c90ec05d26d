"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (task repository).
"""

from task_manager.application.dtos import TaskListQuery
from task_manager.application.interfaces import PAGE_SIZE, ITaskRepository
from task_manager.application.use_cases import TaskService

__all__ = ["ITaskRepository", "PAGE_SIZE", "TaskListQuery", "TaskService"]
