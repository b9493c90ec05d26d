"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from task_manager.domain.entities.task import Task, TaskRequest

# Fixed list page size; page N returns rows [N * PAGE_SIZE, N * PAGE_SIZE + PAGE_SIZE).
PAGE_SIZE = 10


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task storage (the storage port).

    Each call is independent. Implementations raise only the storage
    exceptions from task_manager.domain.exceptions: TaskNotFoundError,
    DateConstraintViolation, StorageError. Mutations are atomic.
    """

    async def create(self, request: TaskRequest) -> Task:
        """Assign a new id and persist all fields; return the created task.

        Raises DateConstraintViolation if the store rejects the due date,
        StorageError on any other failure.
        """

    async def get_by_id(self, task_id: str) -> Task:
        """Return the live task with task_id.

        Raises TaskNotFoundError if no live row matches, StorageError otherwise.
        """

    async def update(self, request: TaskRequest, task_id: str) -> Task:
        """Overwrite all mutable fields of the live task; return input plus id.

        Raises TaskNotFoundError when zero rows are affected,
        DateConstraintViolation on date rule breach, StorageError otherwise.
        """

    async def delete(self, task_id: str) -> None:
        """Soft-delete the live task (set its deletion marker).

        Raises TaskNotFoundError when zero rows are affected, StorageError otherwise.
        """

    async def list_tasks(
        self,
        page: int = 0,
        due_date: str | None = None,
        status: bool | None = None,
    ) -> list[Task]:
        """Return one page of live tasks ordered by due date ascending.

        due_date / status filter by exact match when not None. An empty page
        is an empty list, never TaskNotFoundError. Raises StorageError on failure.
        """
