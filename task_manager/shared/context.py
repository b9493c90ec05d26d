"""Request context management using contextvars.

Provides async-safe storage for request-scoped identifiers (request ID and
correlation ID). Set by the request ID / correlation ID middleware, read by
the logging filter so every log line of a request carries them.

Usage:
    token = set_request_id("abc")
    ...
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for the current task; return a token for reset."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request ID to its value before the matching set."""
    _request_id.reset(token)


def set_correlation_id(correlation_id: str | None) -> Token[str | None]:
    """Set the correlation ID for the current task; return a token for reset."""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str | None]) -> None:
    """Restore the correlation ID to its value before the matching set."""
    _correlation_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _request_id.get()


def get_correlation_id() -> str | None:
    """Return the current correlation ID, or None outside a request."""
    return _correlation_id.get()
