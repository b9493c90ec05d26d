"""Unit tests for TaskRepository error translation and query building (session mocked)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from task_manager.domain.entities.task import TaskRequest
from task_manager.domain.exceptions import (
    DateConstraintViolation,
    StorageError,
    TaskNotFoundError,
)
from task_manager.infrastructure.persistence.repositories.task_repo import (
    TaskRepository,
    is_check_violation,
)

REQUEST = TaskRequest(title="t", description="d", due_date="2024-10-26", status=True)


class _PgError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate


def _integrity_error(sqlstate: str) -> IntegrityError:
    return IntegrityError("INSERT INTO tasks ...", {}, _PgError(sqlstate))


def _result(rowcount: int = 1, row=None, rows=None) -> MagicMock:
    result = MagicMock()
    result.rowcount = rowcount
    result.scalar_one_or_none.return_value = row
    result.scalars.return_value.all.return_value = rows or []
    return result


@pytest.fixture
def db() -> AsyncMock:
    session = AsyncMock()
    session.in_transaction = MagicMock(return_value=False)
    session.add = MagicMock()
    return session


@pytest.fixture
def repo(db: AsyncMock) -> TaskRepository:
    return TaskRepository(db, timeout_seconds=1.0)


def _compiled(stmt):
    return stmt.compile(dialect=postgresql.dialect())


class TestCheckViolation:
    def test_check_violation_sqlstate(self) -> None:
        assert is_check_violation(_integrity_error("23514")) is True

    def test_other_integrity_error(self) -> None:
        assert is_check_violation(_integrity_error("23505")) is False

    def test_psycopg2_pgcode(self) -> None:
        orig = Exception("check")
        orig.pgcode = "23514"
        assert is_check_violation(IntegrityError("stmt", {}, orig)) is True


class TestCreate:
    async def test_create_commits_and_returns_task(self, repo: TaskRepository, db: AsyncMock) -> None:
        task = await repo.create(REQUEST)
        assert task.id
        assert task.due_date == "2024-10-26"
        db.add.assert_called_once()
        db.begin.assert_awaited_once()
        db.commit.assert_awaited_once()
        db.rollback.assert_not_called()

    async def test_check_violation_maps_to_date_conflict(
        self, repo: TaskRepository, db: AsyncMock
    ) -> None:
        db.flush.side_effect = _integrity_error("23514")
        with pytest.raises(DateConstraintViolation) as exc_info:
            await repo.create(REQUEST)
        assert exc_info.value.due_date == "2024-10-26"
        db.rollback.assert_awaited_once()
        db.commit.assert_not_called()

    async def test_other_integrity_error_is_storage_error(
        self, repo: TaskRepository, db: AsyncMock
    ) -> None:
        db.flush.side_effect = _integrity_error("23505")
        with pytest.raises(StorageError) as exc_info:
            await repo.create(REQUEST)
        assert exc_info.value.operation == "create"
        assert exc_info.value.task_id is None
        db.rollback.assert_awaited_once()

    async def test_commit_failure_is_storage_error(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.commit.side_effect = OperationalError("COMMIT", {}, Exception("connection lost"))
        with pytest.raises(StorageError):
            await repo.create(REQUEST)
        db.rollback.assert_awaited_once()

    async def test_rollback_failure_keeps_original_error(
        self, repo: TaskRepository, db: AsyncMock
    ) -> None:
        db.flush.side_effect = _integrity_error("23514")
        db.rollback.side_effect = OperationalError("ROLLBACK", {}, Exception("gone"))
        with pytest.raises(DateConstraintViolation):
            await repo.create(REQUEST)


class TestGetById:
    async def test_missing_row_is_not_found(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(row=None)
        with pytest.raises(TaskNotFoundError) as exc_info:
            await repo.get_by_id("abc")
        assert exc_info.value.task_id == "abc"

    async def test_query_filters_live_rows(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(row=None)
        with pytest.raises(TaskNotFoundError):
            await repo.get_by_id("abc")
        sql = str(_compiled(db.execute.await_args.args[0]))
        assert "tasks.deleted_at IS NULL" in sql

    async def test_backend_failure_is_storage_error(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(StorageError) as exc_info:
            await repo.get_by_id("abc")
        assert (exc_info.value.operation, exc_info.value.task_id) == ("get", "abc")
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_timeout_is_storage_error(self, db: AsyncMock) -> None:
        async def slow(*args, **kwargs):
            await asyncio.sleep(1)

        db.execute.side_effect = slow
        repo = TaskRepository(db, timeout_seconds=0.01)
        with pytest.raises(StorageError):
            await repo.get_by_id("abc")


class TestUpdate:
    async def test_zero_rows_is_not_found_and_rolls_back(
        self, repo: TaskRepository, db: AsyncMock
    ) -> None:
        db.execute.return_value = _result(rowcount=0)
        with pytest.raises(TaskNotFoundError):
            await repo.update(REQUEST, "missing")
        db.rollback.assert_awaited_once()
        db.commit.assert_not_called()

    async def test_returns_task_from_input(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(rowcount=1)
        task = await repo.update(REQUEST, "abc")
        assert task.id == "abc"
        assert (task.title, task.due_date, task.status) == ("t", "2024-10-26", True)
        db.commit.assert_awaited_once()

    async def test_check_violation_maps_to_date_conflict(
        self, repo: TaskRepository, db: AsyncMock
    ) -> None:
        db.execute.side_effect = _integrity_error("23514")
        with pytest.raises(DateConstraintViolation):
            await repo.update(REQUEST, "abc")

    async def test_joins_open_transaction(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.in_transaction.return_value = True
        db.execute.return_value = _result(rowcount=1)
        await repo.update(REQUEST, "abc")
        db.begin.assert_not_called()
        db.commit.assert_awaited_once()


class TestDelete:
    async def test_soft_delete_sets_deleted_at(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(rowcount=1)
        await repo.delete("abc")
        sql = str(_compiled(db.execute.await_args.args[0]))
        assert "SET deleted_at=now()" in sql
        db.commit.assert_awaited_once()

    async def test_zero_rows_is_not_found(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(rowcount=0)
        with pytest.raises(TaskNotFoundError):
            await repo.delete("abc")


class TestListTasks:
    async def test_no_filters(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(rows=[])
        assert await repo.list_tasks() == []
        compiled = _compiled(db.execute.await_args.args[0])
        sql = str(compiled)
        assert "tasks.status =" not in sql
        assert "tasks.due_date =" not in sql
        assert "ORDER BY tasks.due_date ASC, tasks.id ASC" in sql

    async def test_filters_and_page_are_bound(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.return_value = _result(rows=[])
        await repo.list_tasks(page=2, due_date="2024-10-26", status=False)
        compiled = _compiled(db.execute.await_args.args[0])
        sql = str(compiled)
        assert "tasks.status = %(status)s" in sql
        assert compiled.params["status"] is False
        assert "tasks.due_date = %(due_date_1)s" in sql
        assert "2024-10-26" not in sql
        values = list(compiled.params.values())
        assert 20 in values
        assert 10 in values

    async def test_failure_is_storage_error(self, repo: TaskRepository, db: AsyncMock) -> None:
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(StorageError) as exc_info:
            await repo.list_tasks()
        assert exc_info.value.operation == "list"
