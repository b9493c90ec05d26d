"""Header helpers shared by the identifier middlewares (raw ASGI scope headers)."""

import re
import uuid
from typing import Callable

# Safe for log lines: alphanumeric, hyphen, underscore, bounded length.
ID_MAX_LENGTH = 64
ID_ALLOWED_PATTERN = re.compile(r"[a-zA-Z0-9_-]{1,%d}" % ID_MAX_LENGTH)


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_id(raw: str | None) -> str | None:
    """Return the stripped value if it is a safe identifier, else None."""
    if raw is None:
        return None
    value = raw.strip()
    return value if ID_ALLOWED_PATTERN.fullmatch(value) else None


def new_id() -> str:
    return str(uuid.uuid4())


def with_response_header(send: Callable, name: str, value: str) -> Callable:
    """Wrap send so the response start message carries name: value."""

    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            headers = list(message.get("headers", []))
            headers.append((name.encode(), value.encode()))
            message["headers"] = headers
        await send(message)

    return send_wrapper
