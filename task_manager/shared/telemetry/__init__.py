"""Shared telemetry: logging setup and OpenTelemetry config."""

from task_manager.shared.telemetry.logging import (
    RequestContextFilter,
    setup_logging,
)
from task_manager.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

__all__ = [
    "RequestContextFilter",
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
]
