"""Domain layer: task entity and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from task_manager.domain.entities import Task, TaskRequest
from task_manager.domain.exceptions import (
    BadDateFormatError,
    BadJsonError,
    BadQueryParamError,
    DateConstraintViolation,
    InvalidJsonError,
    RequestValidationException,
    StorageError,
    StorageException,
    TaskManagerException,
    TaskNotFoundError,
)

__all__ = [
    # Entities
    "Task",
    "TaskRequest",
    # Exceptions
    "BadDateFormatError",
    "BadJsonError",
    "BadQueryParamError",
    "DateConstraintViolation",
    "InvalidJsonError",
    "RequestValidationException",
    "StorageError",
    "StorageException",
    "TaskManagerException",
    "TaskNotFoundError",
]
