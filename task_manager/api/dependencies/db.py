"""DB and repository dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.config import get_settings
from task_manager.infrastructure.persistence.database import get_db
from task_manager.infrastructure.persistence.repositories import TaskRepository


async def get_task_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    """Task repository bound to the request session."""
    return TaskRepository(
        db, timeout_seconds=get_settings().db_operation_timeout_seconds
    )
