"""Shared utilities: id generation and strict input parsing."""

from task_manager.shared.utils.generators import generate_task_id
from task_manager.shared.utils.parsing import (
    is_valid_date,
    parse_bool,
    parse_date,
    parse_page,
)

__all__ = [
    "generate_task_id",
    "is_valid_date",
    "parse_bool",
    "parse_date",
    "parse_page",
]
