"""Date manipulation utilities"""

import re
from datetime import date

from moneydesk.domain.exceptions import InvalidInputError

_MONTH_KEY = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def days_between(start: date, end: date) -> int:
    """Calendar days from start to end; negative when end is before start"""
    return (end - start).days


def month_key(day: date) -> str:
    """Year-month key used to scope budgets, e.g. 2024-03"""
    return f"{day.year:04d}-{day.month:02d}"


def validate_month_key(value: str) -> str:
    """Return value unchanged if it is a YYYY-MM key"""
    if not isinstance(value, str) or not _MONTH_KEY.match(value):
        raise InvalidInputError(f"month_year must look like YYYY-MM, got {value!r}")
    return value
