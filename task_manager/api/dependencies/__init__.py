"""FastAPI dependencies: composition root and request pipeline."""

from task_manager.api.dependencies.db import get_task_repository
from task_manager.api.dependencies.task import (
    decode_task_request,
    get_list_query,
    get_task_service,
    parse_task_body,
)

__all__ = [
    "decode_task_request",
    "get_list_query",
    "get_task_repository",
    "get_task_service",
    "parse_task_body",
]
