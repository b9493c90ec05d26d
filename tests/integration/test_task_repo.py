"""Task repository integration tests. Require Postgres; the tasks table is emptied before each test."""

import pytest

from task_manager.domain.entities.task import TaskRequest
from task_manager.domain.exceptions import DateConstraintViolation, TaskNotFoundError
from task_manager.infrastructure.persistence.repositories.task_repo import TaskRepository


def _request(due_date: str = "2024-10-26", status: bool = False, title: str = "t") -> TaskRequest:
    return TaskRequest(title=title, description="d", due_date=due_date, status=status)


@pytest.mark.requires_db
async def test_create_then_get(db_session) -> None:
    repo = TaskRepository(db_session)
    created = await repo.create(_request())
    found = await repo.get_by_id(created.id)
    assert found == created


@pytest.mark.requires_db
async def test_update_overwrites_fields(db_session) -> None:
    repo = TaskRepository(db_session)
    created = await repo.create(_request())
    updated = await repo.update(_request(due_date="2025-01-02", status=True, title="t2"), created.id)
    assert await repo.get_by_id(created.id) == updated


@pytest.mark.requires_db
async def test_update_unknown_id_is_not_found(db_session) -> None:
    repo = TaskRepository(db_session)
    with pytest.raises(TaskNotFoundError):
        await repo.update(_request(), "00000000-0000-0000-0000-000000000000")


@pytest.mark.requires_db
async def test_delete_twice(db_session) -> None:
    repo = TaskRepository(db_session)
    created = await repo.create(_request())
    await repo.delete(created.id)
    with pytest.raises(TaskNotFoundError):
        await repo.delete(created.id)
    with pytest.raises(TaskNotFoundError):
        await repo.get_by_id(created.id)


@pytest.mark.requires_db
async def test_date_outside_window_is_rejected(db_session) -> None:
    repo = TaskRepository(db_session)
    with pytest.raises(DateConstraintViolation):
        await repo.create(_request(due_date="1999-12-31"))
    assert await repo.list_tasks() == []


@pytest.mark.requires_db
async def test_list_pages_and_filters(db_session) -> None:
    repo = TaskRepository(db_session)
    for day in range(12, 0, -1):
        await repo.create(_request(due_date=f"2024-03-{day:02d}", status=day % 2 == 0))
    page0 = await repo.list_tasks(page=0)
    page1 = await repo.list_tasks(page=1)
    assert [t.due_date for t in page0] == [f"2024-03-{d:02d}" for d in range(1, 11)]
    assert [t.due_date for t in page1] == ["2024-03-11", "2024-03-12"]
    done = await repo.list_tasks(status=True, due_date="2024-03-04")
    assert [t.due_date for t in done] == ["2024-03-04"]
    assert await repo.list_tasks(status=False, due_date="2024-03-04") == []
