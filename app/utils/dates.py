"""
ShiftSync - Date Utilities

Calendar-date helpers shared by the attendance, leave, payroll and import
code. Every date is a plain calendar day in the employee's local timezone;
no timezone conversion is ever applied.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Tuple, Union

from app.utils.error_handling import ErrorCode, ValidationException

DateLike = Union[date, datetime, str]

# Accepted import formats, tried in order. DD/MM/YYYY wins over MM/DD/YYYY.
IMPORT_DATE_FORMATS = ("%Y/%m/%d", "%d/%m/%Y", "%Y-%m-%d")


def normalize_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a calendar ``date``.

    A ``datetime`` keeps its own year/month/day components (it is never
    shifted to UTC first). Strings must be ISO ``YYYY-MM-DD``.

    Raises:
        ValueError: If a string is not a valid ISO date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def require_date(value: DateLike, field: str = "date") -> date:
    """
    ``normalize_date`` for caller input.

    Raises:
        ValidationException: If the value is missing or not a valid ISO date.
    """
    if value is None or value == "":
        raise ValidationException(f"'{field}' is required", field=field, code=ErrorCode.MISSING_FIELD)
    try:
        return normalize_date(value)
    except ValueError:
        raise ValidationException(
            f"Invalid {field} '{value}'. Use YYYY-MM-DD.",
            field=field,
            code=ErrorCode.INVALID_FORMAT,
        ) from None


def parse_import_date(raw: str) -> date:
    """
    Parse a date from an import file.

    Accepts ``YYYY/MM/DD``, ``DD/MM/YYYY`` and ``YYYY-MM-DD``.

    Raises:
        ValueError: If the text matches none of the formats.
    """
    text = (raw or "").strip()
    for fmt in IMPORT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date format '{raw}'. Use YYYY/MM/DD, DD/MM/YYYY or YYYY-MM-DD.")


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month."""
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]
