"""Task domain entity and write payload.

Pure data. The only behavior is identity generation for new tasks; the id is
assigned here, never by the store.
"""

from __future__ import annotations

from dataclasses import dataclass

from task_manager.shared.utils.generators import generate_task_id


@dataclass(frozen=True)
class TaskRequest:
    """Mutable fields of a task (create and update payload).

    due_date is the external YYYY-MM-DD string; format is checked by the
    request pipeline before a TaskRequest reaches storage.
    """

    title: str
    description: str
    due_date: str
    status: bool


@dataclass(frozen=True)
class Task:
    """A stored task: generated id plus the request fields."""

    id: str
    title: str
    description: str
    due_date: str
    status: bool

    @classmethod
    def new(cls, request: TaskRequest) -> Task:
        """Build a task for request with a freshly generated id."""
        return cls.from_request(generate_task_id(), request)

    @classmethod
    def from_request(cls, task_id: str, request: TaskRequest) -> Task:
        """Combine an existing id with request fields (used by update)."""
        return cls(
            id=task_id,
            title=request.title,
            description=request.description,
            due_date=request.due_date,
            status=request.status,
        )
