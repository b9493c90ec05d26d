"""ORM models."""

from task_manager.infrastructure.persistence.models.mixins import SoftDeleteMixin
from task_manager.infrastructure.persistence.models.task import (
    DUE_DATE_CHECK_NAME,
    TaskRecord,
)

__all__ = ["DUE_DATE_CHECK_NAME", "SoftDeleteMixin", "TaskRecord"]
