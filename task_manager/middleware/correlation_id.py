"""Correlation ID middleware.

Forwards a valid client X-Correlation-ID, else reuses the request id. Must
run inside RequestIDMiddleware. Raw ASGI.
"""

from typing import Callable

from task_manager.middleware.headers import (
    get_header,
    new_id,
    sanitize_id,
    with_response_header,
)
from task_manager.shared.context import reset_correlation_id, set_correlation_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward the correlation id on each request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        correlation_id = (
            sanitize_id(get_header(scope, header_name))
            or scope.get("state", {}).get("request_id")
            or new_id()
        )
        scope.setdefault("state", {})["correlation_id"] = correlation_id
        token = set_correlation_id(correlation_id)
        try:
            await app(
                scope, receive, with_response_header(send, header_name, correlation_id)
            )
        finally:
            reset_correlation_id(token)

    return asgi_app
