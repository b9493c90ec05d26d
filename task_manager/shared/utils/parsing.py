"""Strict parsers for dates, booleans and page numbers taken from client input."""

import re
from datetime import date

# Exactly four-digit year, two-digit month and day.
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_PAGE_PATTERN = re.compile(r"[0-9]+")
PAGE_MAX = 2**32 - 1


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If value is not in that exact layout or is not a real
            calendar date (e.g. 2024-13-40).
    """
    if not _DATE_PATTERN.fullmatch(value):
        raise ValueError(f"date must be YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(value)


def is_valid_date(value: str) -> bool:
    """Return True if value is an exact YYYY-MM-DD calendar date."""
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def parse_bool(value: str) -> bool:
    """Parse the usual boolean spellings (1/0, t/f, true/false in three cases).

    Raises:
        ValueError: If value is none of the accepted spellings.
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def parse_page(value: str) -> int:
    """Parse a non-negative base-10 page number that fits in 32 bits.

    Raises:
        ValueError: On signs, whitespace, non-digits or overflow.
    """
    if not _PAGE_PATTERN.fullmatch(value):
        raise ValueError(f"invalid page: {value!r}")
    page = int(value)
    if page > PAGE_MAX:
        raise ValueError(f"page out of range: {value!r}")
    return page
