"""Task API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from task_manager.domain.entities.task import Task, TaskRequest

REQUIRED_TEXT_FIELDS = ("title", "description", "due_date")


class TaskRequestBody(BaseModel):
    """Decoded request body for create and update.

    Strict: present fields must already have the right JSON type (no string to
    bool coercion). Every field is optional here so that a missing field is
    told apart from a mistyped one; see missing_fields().
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    title: str | None = None
    description: str | None = None
    due_date: str | None = None
    status: bool | None = None

    def missing_fields(self) -> list[str]:
        """Return required fields that are absent, null or empty."""
        missing = [name for name in REQUIRED_TEXT_FIELDS if not getattr(self, name)]
        if self.status is None:
            missing.append("status")
        return missing

    def to_request(self) -> TaskRequest:
        """Build the domain payload. Call only when missing_fields() is empty."""
        return TaskRequest(
            title=self.title or "",
            description=self.description or "",
            due_date=self.due_date or "",
            status=bool(self.status),
        )


class TaskResponse(BaseModel):
    """Task as returned by create, get, update and list."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    due_date: str = Field(..., description="YYYY-MM-DD")
    status: bool

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls.model_validate(task)
