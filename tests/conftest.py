"""Pytest configuration and fixtures for task-manager.

HTTP tests run against create_app() with the storage port swapped for an
in-memory fake through app.dependency_overrides, so they need no database.
Repository integration tests use db_session and are marked requires_db.
"""

import os
from datetime import date
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import task_manager.infrastructure.persistence.database as database
from task_manager.api.dependencies import get_task_repository
from task_manager.application.interfaces.repositories import PAGE_SIZE
from task_manager.domain.entities.task import Task, TaskRequest
from task_manager.domain.exceptions import DateConstraintViolation, TaskNotFoundError
from task_manager.main import create_app

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "scripts" / "init_db.sql"

# Same window as the tasks_due_date_check constraint.
_MIN_DUE = date(2000, 1, 1)
_MAX_DUE = date(2999, 12, 31)


class InMemoryTaskRepository:
    """ITaskRepository kept in a dict; mirrors the PostgreSQL adapter's rules."""

    def __init__(self) -> None:
        self.rows: dict[str, Task] = {}
        self.deleted: set[str] = set()

    def _check_date(self, due_date: str) -> None:
        if not _MIN_DUE <= date.fromisoformat(due_date) <= _MAX_DUE:
            raise DateConstraintViolation(due_date)

    def _live(self, task_id: str) -> Task:
        if task_id not in self.rows or task_id in self.deleted:
            raise TaskNotFoundError(task_id)
        return self.rows[task_id]

    async def create(self, request: TaskRequest) -> Task:
        self._check_date(request.due_date)
        task = Task.new(request)
        self.rows[task.id] = task
        return task

    async def get_by_id(self, task_id: str) -> Task:
        return self._live(task_id)

    async def update(self, request: TaskRequest, task_id: str) -> Task:
        self._live(task_id)
        self._check_date(request.due_date)
        task = Task.from_request(task_id, request)
        self.rows[task_id] = task
        return task

    async def delete(self, task_id: str) -> None:
        self._live(task_id)
        self.deleted.add(task_id)

    async def list_tasks(
        self,
        page: int = 0,
        due_date: str | None = None,
        status: bool | None = None,
    ) -> list[Task]:
        live = [t for t in self.rows.values() if t.id not in self.deleted]
        if due_date is not None:
            live = [t for t in live if t.due_date == due_date]
        if status is not None:
            live = [t for t in live if t.status == status]
        live.sort(key=lambda t: (t.due_date, t.id))
        return live[page * PAGE_SIZE : (page + 1) * PAGE_SIZE]


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def app(task_repo):
    """Fresh app whose task routes use the in-memory repository."""
    application = create_app()
    application.dependency_overrides[get_task_repository] = lambda: task_repo
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session on a freshly emptied tasks table.

    Skips unless DATABASE_URL or POSTGRES_HOST is set and the database
    answers. Use @pytest.mark.requires_db on tests that need it; run without
    a database via: pytest -m 'not requires_db'.
    """
    if not (os.environ.get("DATABASE_URL") or os.environ.get("POSTGRES_HOST")):
        pytest.skip("Postgres not configured: set DATABASE_URL or POSTGRES_HOST")
    try:
        await database.init_schema(SCHEMA_PATH)
        async with database.get_engine().begin() as conn:
            await conn.execute(text("TRUNCATE TABLE tasks"))
    except (OSError, SQLAlchemyError) as e:
        await database.dispose_engine()
        pytest.skip(f"Postgres not reachable: {e}")
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        yield session
    await database.dispose_engine()
