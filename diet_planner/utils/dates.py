# diet_planner/utils/dates.py
"""
Date-key helpers.

All dates cross module boundaries as "YYYY-MM-DD" strings. Keys are
validated once at the edge; everything below trusts them.
"""
import calendar
import re
from datetime import date, datetime, timedelta
from typing import List, Tuple

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_FORMAT = "%Y-%m-%d"

WEEKDAY_LABELS = ["월", "화", "수", "목", "금", "토", "일"]


def is_date_key(value) -> bool:
    """
    Check whether a value is a well-formed, real calendar date key.

    Args:
        value: Anything

    Returns:
        True for strings like "2024-03-10" naming an existing day
    """
    if not isinstance(value, str) or not DATE_KEY_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def validate_date_key(value) -> str:
    """
    Validate a caller-supplied date key.

    Args:
        value: Date key to check

    Returns:
        The key unchanged

    Raises:
        ValueError: If the key is not YYYY-MM-DD or not a real date
    """
    if not is_date_key(value):
        raise ValueError(f"Invalid date key: {value!r} (expected YYYY-MM-DD)")
    return value


def parse_date_key(date_key: str) -> date:
    return datetime.strptime(validate_date_key(date_key), DATE_FORMAT).date()


def format_date_key(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def today_key() -> str:
    return format_date_key(date.today())


def offset_date_key(date_key: str, days: int) -> str:
    """
    Shift a date key by a number of days.

    Example:
        >>> offset_date_key("2024-03-01", -1)
        '2024-02-29'
    """
    return format_date_key(parse_date_key(date_key) + timedelta(days=days))


def month_date_keys(year: int, month: int) -> List[str]:
    """All date keys of a calendar month (month is 1-based)."""
    last_day = calendar.monthrange(year, month)[1]
    return [format_date_key(date(year, month, day)) for day in range(1, last_day + 1)]


def previous_month(date_key: str) -> Tuple[int, int]:
    """(year, month) of the calendar month before the key's month."""
    current = parse_date_key(date_key)
    if current.month == 1:
        return current.year - 1, 12
    return current.year, current.month - 1


def format_date_label(date_key: str) -> str:
    """Short Korean label, e.g. "3/10(일)"."""
    current = parse_date_key(date_key)
    return f"{current.month}/{current.day}({WEEKDAY_LABELS[current.weekday()]})"
