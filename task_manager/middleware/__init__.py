"""HTTP middleware: timeout, request ID, correlation ID.

Applied in main app; order matters (Starlette wraps in reverse, so the last added is outermost).
"""

from task_manager.middleware.correlation_id import CorrelationIDMiddleware
from task_manager.middleware.request_id import RequestIDMiddleware
from task_manager.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
