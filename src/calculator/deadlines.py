"""
Statutory Deadline Calculator.

Turns a triggering event date plus a day offset into a due date and
classifies due dates as upcoming, passed or safe relative to a caller
supplied "now". Nothing here reads the wall clock, so every result is a
pure function of its arguments.

Deadlines are plain calendar days: weekends and court holidays are not
skipped, which matches the "days" wording of the encoded CPLR, CPL and GML
rules.
"""

from __future__ import annotations

import calendar
import logging
import math
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

from rules.exceptions import InvalidInputError

from .decimal_math import Numeric, to_decimal

logger = logging.getLogger(__name__)

DateInput = Union[date, datetime, str]

DEFAULT_UPCOMING_WINDOW_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60


class DeadlineStatus(str, Enum):
    """Risk status of a due date relative to now."""
    UPCOMING = "upcoming"  # due within the look-ahead window
    PASSED = "passed"
    SAFE = "safe"


def parse_date(value: DateInput, field_name: str = "date") -> date:
    """
    Coerce a date, datetime or ISO-8601 string to a calendar date.

    Raises:
        InvalidInputError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise InvalidInputError(f"{field_name}: '{value}' is not a valid date") from None
    raise InvalidInputError(f"{field_name}: expected a date, got {type(value).__name__}")


def _as_datetime(value: DateInput, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(parse_date(value, field_name), time.min)


def compute_deadline(trigger_date: DateInput, offset_days: int) -> date:
    """
    Add a statutory day offset to a triggering date.

    Args:
        trigger_date: Date of the triggering event (incident, service, arraignment)
        offset_days: Non-negative number of calendar days

    Returns:
        The due date

    Raises:
        InvalidInputError: If the date is invalid or the offset is negative

    Examples:
        >>> compute_deadline("2024-01-15", 90)
        datetime.date(2024, 4, 14)
    """
    start = parse_date(trigger_date, "trigger_date")
    if isinstance(offset_days, bool) or not isinstance(offset_days, int):
        raise InvalidInputError(f"offset_days must be an integer, got {offset_days!r}")
    if offset_days < 0:
        raise InvalidInputError(f"offset_days cannot be negative: {offset_days}")
    try:
        return start + timedelta(days=offset_days)
    except OverflowError:
        raise InvalidInputError(f"Deadline {offset_days} days after {start} is out of range") from None


def days_until(due_date: DateInput, now: DateInput) -> int:
    """
    Whole days from now until the due date, rounded up.

    A due date later today (now has a time component) counts as 0 days.
    """
    due = _as_datetime(due_date, "due_date")
    current = _as_datetime(now, "now")
    if current.tzinfo is not None and due.tzinfo is None:
        due = due.replace(tzinfo=current.tzinfo)
    elif due.tzinfo is not None and current.tzinfo is None:
        current = current.replace(tzinfo=due.tzinfo)
    return math.ceil((due - current).total_seconds() / SECONDS_PER_DAY)


def classify_deadline(
    due_date: DateInput,
    now: DateInput,
    window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
) -> DeadlineStatus:
    """
    Classify a due date against an explicit "now".

    With d = days_until(due_date, now):
        d <= 0              -> PASSED (due today counts as passed)
        0 < d <= window     -> UPCOMING
        d > window          -> SAFE

    The default 30-day window matches the shortest filing windows in the
    catalogue (e.g. the bill of particulars).
    """
    if window_days < 0:
        raise InvalidInputError(f"window_days cannot be negative: {window_days}")
    remaining = days_until(due_date, now)
    if remaining <= 0:
        return DeadlineStatus.PASSED
    if remaining <= window_days:
        return DeadlineStatus.UPCOMING
    return DeadlineStatus.SAFE


# =============================================================================
# Calendar-accurate month arithmetic
# =============================================================================

def add_months(anchor: DateInput, months: int) -> date:
    """
    Add whole calendar months, clamping to the last day of short months.

    Examples:
        >>> add_months("2024-01-31", 1)
        datetime.date(2024, 2, 29)
        >>> add_months("2024-01-01", 6)
        datetime.date(2024, 7, 1)
    """
    start = parse_date(anchor, "anchor_date")
    if isinstance(months, bool) or not isinstance(months, int):
        raise InvalidInputError(f"months must be an integer, got {months!r}")
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    if not 1 <= year <= 9999:
        raise InvalidInputError(f"{months} months from {start} is out of range")
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_to_calendar_days(months: int, anchor: DateInput) -> int:
    """
    Length in days of a month-denominated period starting at anchor.

    Examples:
        >>> months_to_calendar_days(6, "2024-01-01")
        182
    """
    if isinstance(months, int) and not isinstance(months, bool) and months < 0:
        raise InvalidInputError(f"months cannot be negative: {months}")
    start = parse_date(anchor, "anchor_date")
    return (add_months(start, months) - start).days


def statute_of_limitations_expiry(accrual_date: DateInput, years: Numeric) -> date:
    """
    Last day of a limitation period measured in years from accrual.

    Fractional years must resolve to whole months (CPLR §214-a's two and a
    half years is 30 months).

    Raises:
        InvalidInputError: For negative periods or periods that are not whole months
    """
    period_years = to_decimal(years)
    if period_years < 0:
        raise InvalidInputError(f"Limitation period cannot be negative: {years}")
    months = period_years * 12
    if months != months.to_integral_value():
        raise InvalidInputError(f"Limitation period of {years} years is not a whole number of months")
    return add_months(accrual_date, int(months))
