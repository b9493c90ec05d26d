"""PostgreSQL persistence (SQLAlchemy asyncio)."""
