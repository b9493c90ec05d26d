"""Task ORM model. Mirrors the tasks table created by scripts/init_db.sql."""

from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Date, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.infrastructure.persistence.database import Base
from task_manager.infrastructure.persistence.models.mixins import SoftDeleteMixin

DUE_DATE_CHECK_NAME = "tasks_due_date_check"


class TaskRecord(SoftDeleteMixin, Base):
    """Stored task row. Table: tasks. id is assigned by the domain, not the database."""

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint(
            "due_date BETWEEN DATE '2000-01-01' AND DATE '2999-12-31'",
            name=DUE_DATE_CHECK_NAME,
        ),
        Index(
            "ix_tasks_due_date_live",
            "due_date",
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )
