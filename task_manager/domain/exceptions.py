"""Domain exceptions for the task manager.

Two closed families, both matched by type (never by message text):

- Request errors raised by the request pipeline before storage is touched
  (BadJsonError, InvalidJsonError, BadDateFormatError, BadQueryParamError).
- Storage errors raised by the storage port (TaskNotFoundError,
  DateConstraintViolation, StorageError).

The presentation layer maps each class to an HTTP status and envelope in
task_manager.core.exception_handlers.
"""

from typing import Any


class TaskManagerException(Exception):
    """Base exception for all task manager errors.

    Attributes:
        message: Human-readable error description (logged, not sent to clients).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. param, value, task_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


# ---- Request pipeline -------------------------------------------------------


class RequestValidationException(TaskManagerException):
    """Base for client input errors detected before storage is called."""


class BadJsonError(RequestValidationException):
    """Body is not syntactically valid JSON, or a field has the wrong JSON type."""

    def __init__(self, reason: str = "") -> None:
        message = "Request body is not valid JSON"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "BAD_JSON", {"reason": reason} if reason else {})


class InvalidJsonError(RequestValidationException):
    """Body is valid JSON but a required field is missing, null or empty."""

    def __init__(self, fields: list[str] | None = None) -> None:
        fields = fields or []
        super().__init__(
            f"Missing or empty required fields: {', '.join(fields)}",
            "INVALID_JSON",
            {"fields": fields},
        )


class BadDateFormatError(RequestValidationException):
    """A date string is not in YYYY-MM-DD form or is not a calendar date."""

    def __init__(self, value: str) -> None:
        """Initialize with the offending value.

        Args:
            value: The submitted date string, echoed back to the client.
        """
        self.param = "date"
        self.value = value
        super().__init__(
            f"Bad date format: {value!r}",
            "BAD_DATE_FORMAT",
            {"param": self.param, "value": value},
        )


class BadQueryParamError(RequestValidationException):
    """A list query parameter (status, page) could not be parsed."""

    def __init__(self, param: str, value: str, error: str) -> None:
        """Initialize with the rejected parameter.

        Args:
            param: Query parameter name (e.g. 'status', 'page').
            value: The submitted value.
            error: Short client-facing error (e.g. 'bad status').
        """
        self.param = param
        self.value = value
        self.error = error
        super().__init__(
            f"Bad query parameter {param}={value!r}",
            "BAD_QUERY_PARAM",
            {"param": param, "value": value, "error": error},
        )


# ---- Storage port -----------------------------------------------------------


class StorageException(TaskManagerException):
    """Base for the closed set of errors the storage port may raise."""


class TaskNotFoundError(StorageException):
    """No live task matches the id (lookup found nothing or zero rows affected)."""

    def __init__(self, task_id: str) -> None:
        """Initialize with the missing task identifier.

        Args:
            task_id: The task ID that was not found.
        """
        self.task_id = task_id
        super().__init__(
            f"Task not found: {task_id}",
            "TASK_NOT_FOUND",
            {"task_id": task_id},
        )


class DateConstraintViolation(StorageException):
    """The store's due-date check constraint rejected the submitted date."""

    def __init__(self, due_date: str) -> None:
        """Initialize with the rejected date.

        Args:
            due_date: The submitted YYYY-MM-DD string.
        """
        self.due_date = due_date
        super().__init__(
            f"Due date rejected by storage: {due_date}",
            "DATE_CONSTRAINT_VIOLATION",
            {"due_date": due_date},
        )


class StorageError(StorageException):
    """Any other persistence failure (connection, query, timeout, commit).

    The underlying cause is chained (raise ... from) and logged; it is never
    sent to the client.
    """

    def __init__(self, operation: str, task_id: str | None = None) -> None:
        """Initialize with operation context.

        Args:
            operation: Storage operation that failed (e.g. 'create', 'list').
            task_id: Submitted task id when the operation had one.
        """
        self.operation = operation
        self.task_id = task_id
        details: dict[str, Any] = {"operation": operation}
        if task_id:
            details["task_id"] = task_id
        super().__init__(
            f"Storage operation '{operation}' failed",
            "STORAGE_ERROR",
            details,
        )
