"""Request ID middleware.

Forwards a valid client X-Request-ID or generates one, exposes it to logging
through the request context, and echoes it on the response. Raw ASGI.
"""

from typing import Callable

from task_manager.middleware.headers import (
    get_header,
    new_id,
    sanitize_id,
    with_response_header,
)
from task_manager.shared.context import reset_request_id, set_request_id


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id on each request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_id(get_header(scope, header_name)) or new_id()
        scope.setdefault("state", {})["request_id"] = request_id
        token = set_request_id(request_id)
        try:
            await app(scope, receive, with_response_header(send, header_name, request_id))
        finally:
            reset_request_id(token)

    return asgi_app
