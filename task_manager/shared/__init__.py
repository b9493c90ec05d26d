"""Shared utilities: request context, telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
Telemetry is imported from task_manager.shared.telemetry directly so that
the domain layer does not pull in OpenTelemetry.
"""

from task_manager.shared.context import get_correlation_id, get_request_id
from task_manager.shared.utils import generate_task_id

__all__ = [
    "get_correlation_id",
    "get_request_id",
    "generate_task_id",
]
