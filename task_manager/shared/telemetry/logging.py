"""Logging configuration for the application."""

import logging
import sys

from task_manager.core.config import get_settings
from task_manager.shared.context import get_correlation_id, get_request_id

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[request_id=%(request_id)s correlation_id=%(correlation_id)s] %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Attach request_id and correlation_id from the request context to each record.

    Records logged outside a request get "-" so the format never fails.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.correlation_id = get_correlation_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Output goes to stdout. Safe to call more than once (force=True replaces
    the root handlers).
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.getLevelName(
        settings.log_level.upper()
    )
    if not isinstance(log_level, int):
        log_level = logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
