"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Engine and session factory are created lazily on first use (get_db) so
import does not trigger Settings validation or open connections.

Schema is created from the bundled SQL file (scripts/init_db.sql) by
init_schema(), run from scripts/init_db.py or at startup when
DB_INIT_ON_STARTUP is true.
"""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from task_manager.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    url = settings.sqlalchemy_url
    connect_args: dict[str, Any] = {}
    if "asyncpg" in url:
        connect_args["command_timeout"] = settings.db_command_timeout
    engine = create_async_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=3600,
        connect_args=connect_args,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def get_engine() -> AsyncEngine:
    """Return the process engine, creating it on first use."""
    _ensure_engine()
    assert engine is not None
    return engine


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


async def get_db():
    """Database session dependency, one per request.

    The session checks a pooled connection out on first statement and
    returns it when the session closes, on every exit path. Repositories
    open their own transactions for writes.
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session


def split_sql_statements(sql: str) -> list[str]:
    """Split a plain SQL script into statements (no procedural bodies supported).

    Full-line `--` comments are dropped; statements are separated by `;`.
    """
    lines = [
        line for line in sql.splitlines() if not line.lstrip().startswith("--")
    ]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


async def init_schema(path: str | Path | None = None) -> int:
    """Execute the schema SQL file in one transaction; return statement count.

    Args:
        path: SQL file; defaults to settings.db_init_file_path.

    Raises:
        FileNotFoundError: If the file does not exist.
        sqlalchemy.exc.SQLAlchemyError: If a statement fails (nothing is applied).
    """
    sql_path = Path(path or get_settings().db_init_file_path)
    statements = split_sql_statements(sql_path.read_text(encoding="utf-8"))
    async with get_engine().begin() as conn:
        for statement in statements:
            await conn.exec_driver_sql(statement)
    logger.info("Schema initialized from %s (%d statements)", sql_path, len(statements))
    return len(statements)


async def dispose_engine() -> None:
    """Close all pooled connections and forget the engine."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None
