"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskListQuery:
    """Validated list parameters. None filters mean "no constraint"."""

    page: int = 0
    due_date: str | None = None
    status: bool | None = None
