"""Repository implementations (SQLAlchemy)."""

from task_manager.infrastructure.persistence.repositories.task_repo import (
    TaskRepository,
)

__all__ = ["TaskRepository"]
