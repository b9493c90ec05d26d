"""API request/response schemas."""

from task_manager.schemas.health import HealthResponse, ReadinessResponse
from task_manager.schemas.responses import ErrorResponse, MessageResponse
from task_manager.schemas.task import TaskRequestBody, TaskResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "ReadinessResponse",
    "TaskRequestBody",
    "TaskResponse",
]
