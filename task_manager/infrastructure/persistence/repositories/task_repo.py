"""Task repository over the tasks table. Implements ITaskRepository.

Every statement is built with SQLAlchemy constructs, so all client values
(including the optional list filters) are bound parameters. Backend errors
are translated into the storage exceptions of the domain:

- check constraint violation (SQLSTATE 23514) on create/update -> DateConstraintViolation
- no live row / zero rows affected -> TaskNotFoundError
- anything else, including the per-operation timeout -> StorageError
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import bindparam, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.application.interfaces.repositories import PAGE_SIZE
from task_manager.domain.entities.task import Task, TaskRequest
from task_manager.domain.exceptions import (
    DateConstraintViolation,
    StorageError,
    StorageException,
    TaskNotFoundError,
)
from task_manager.infrastructure.persistence.models.task import TaskRecord
from task_manager.shared.utils.parsing import parse_date

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
CHECK_VIOLATION_SQLSTATE = "23514"


def _to_task(row: TaskRecord) -> Task:
    """Map TaskRecord ORM to Task entity (date back to YYYY-MM-DD)."""
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        due_date=row.due_date.isoformat(),
        status=row.status,
    )


def _to_record(task: Task) -> TaskRecord:
    """Map Task entity to a new TaskRecord row."""
    return TaskRecord(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=parse_date(task.due_date),
        status=task.status,
    )


def is_check_violation(exc: IntegrityError) -> bool:
    """Return True if the DBAPI error behind exc is a check constraint violation.

    asyncpg (through SQLAlchemy's adapter) and psycopg expose the SQLSTATE as
    `sqlstate`; psycopg2 exposes it as `pgcode`.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code == CHECK_VIOLATION_SQLSTATE


class TaskRepository:
    """Task repository. Implements ITaskRepository.

    Bound to one request-scoped session. Each operation is limited by
    timeout_seconds; mutations run in their own transaction (commit on
    success, rollback on any error).
    """

    def __init__(
        self,
        db: AsyncSession,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.db = db
        self.timeout_seconds = timeout_seconds

    @asynccontextmanager
    async def _guard(
        self, operation: str, task_id: str | None = None
    ) -> AsyncIterator[None]:
        """Bound the operation by the timeout and wrap backend failures as StorageError."""
        try:
            async with asyncio.timeout(self.timeout_seconds):
                yield
        except StorageException:
            raise
        except TimeoutError as e:
            logger.error(
                "Storage operation %s timed out after %ss",
                operation,
                self.timeout_seconds,
                extra={"operation": operation, "task_id": task_id},
            )
            raise StorageError(operation, task_id) from e
        except (SQLAlchemyError, OSError, ValueError) as e:
            logger.exception(
                "Storage operation %s failed: %s",
                operation,
                e,
                extra={"operation": operation, "task_id": task_id},
            )
            raise StorageError(operation, task_id) from e

    @asynccontextmanager
    async def _transaction(
        self, operation: str, task_id: str | None = None
    ) -> AsyncIterator[None]:
        """Run the block in one transaction: commit on success, rollback on error.

        Rollback failures are logged and the original error propagates. A
        commit failure means nothing was stored and surfaces as StorageError.
        """
        if not self.db.in_transaction():
            await self.db.begin()
        try:
            yield
        except BaseException:
            await self._rollback(operation)
            raise
        try:
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.exception(
                "Transaction commit failed for %s",
                operation,
                extra={"operation": operation, "task_id": task_id},
            )
            await self._rollback(operation)
            raise StorageError(operation, task_id) from e

    async def _rollback(self, operation: str) -> None:
        try:
            await self.db.rollback()
        except (SQLAlchemyError, OSError):
            logger.exception(
                "Transaction rollback failed for %s",
                operation,
                extra={"operation": operation},
            )

    async def create(self, request: TaskRequest) -> Task:
        """Assign a new id, insert the row and return the task."""
        task = Task.new(request)
        async with self._guard("create"):
            async with self._transaction("create"):
                self.db.add(_to_record(task))
                try:
                    await self.db.flush()
                except IntegrityError as e:
                    if is_check_violation(e):
                        raise DateConstraintViolation(request.due_date) from e
                    raise
        return task

    async def get_by_id(self, task_id: str) -> Task:
        """Return the live task with task_id or raise TaskNotFoundError."""
        async with self._guard("get", task_id):
            result = await self.db.execute(
                select(TaskRecord).where(
                    TaskRecord.id == task_id,
                    TaskRecord.deleted_at.is_(None),
                )
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise TaskNotFoundError(task_id)
            return _to_task(row)

    async def update(self, request: TaskRequest, task_id: str) -> Task:
        """Overwrite title, description, due_date and status of the live task."""
        async with self._guard("update", task_id):
            async with self._transaction("update", task_id):
                stmt = (
                    update(TaskRecord)
                    .where(
                        TaskRecord.id == task_id,
                        TaskRecord.deleted_at.is_(None),
                    )
                    .values(
                        title=request.title,
                        description=request.description,
                        due_date=parse_date(request.due_date),
                        status=request.status,
                    )
                    .execution_options(synchronize_session=False)
                )
                try:
                    result = await self.db.execute(stmt)
                except IntegrityError as e:
                    if is_check_violation(e):
                        raise DateConstraintViolation(request.due_date) from e
                    raise
                if result.rowcount == 0:
                    raise TaskNotFoundError(task_id)
        return Task.from_request(task_id, request)

    async def delete(self, task_id: str) -> None:
        """Set deleted_at on the live task; the row is kept."""
        async with self._guard("delete", task_id):
            async with self._transaction("delete", task_id):
                result = await self.db.execute(
                    update(TaskRecord)
                    .where(
                        TaskRecord.id == task_id,
                        TaskRecord.deleted_at.is_(None),
                    )
                    .values(deleted_at=func.now())
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise TaskNotFoundError(task_id)

    async def list_tasks(
        self,
        page: int = 0,
        due_date: str | None = None,
        status: bool | None = None,
    ) -> list[Task]:
        """Return page `page` of live tasks, optionally filtered, by due date ascending."""
        async with self._guard("list"):
            stmt = select(TaskRecord).where(TaskRecord.deleted_at.is_(None))
            if due_date is not None:
                stmt = stmt.where(TaskRecord.due_date == parse_date(due_date))
            if status is not None:
                stmt = stmt.where(TaskRecord.status == bindparam("status", status))
            stmt = (
                stmt.order_by(TaskRecord.due_date.asc(), TaskRecord.id.asc())
                .offset(page * PAGE_SIZE)
                .limit(PAGE_SIZE)
            )
            result = await self.db.execute(stmt)
            return [_to_task(row) for row in result.scalars().all()]
