"""Gestational date calculations.

Converts between the last menstrual period (LMP), the due date, the current
gestational week, the trimester and the days elapsed / remaining.

Every function works on ``datetime.date`` values.  String and ``datetime``
inputs go through :func:`parse_date` once, at the top of each public
function.  Time-relative calculations take an explicit ``as_of`` date so the
caller decides what "today" is.

Usage::

    from src.journey.dates import calculate_current_week, calculate_due_date

    due = calculate_due_date("2026-01-05")                     # date(2026, 10, 5)
    week = calculate_current_week("2026-01-05", as_of=today)   # 1..42
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Union

# Standard pregnancy length in weeks
PREGNANCY_LENGTH_WEEKS = 40

# Displayed week is always forced into this range (42 covers post-term)
MIN_WEEK = 1
MAX_WEEK = 42

FIRST_TRIMESTER_LAST_WEEK = 13
SECOND_TRIMESTER_LAST_WEEK = 26

_LMP_TO_DUE = timedelta(weeks=PREGNANCY_LENGTH_WEEKS) - timedelta(days=7)

DateInput = Union[date, datetime, str]


class ParseError(ValueError):
    """Raised when a date input cannot be parsed."""

    def __init__(self, value: object, reason: str = "not a valid ISO-8601 date") -> None:
        self.value = value
        super().__init__(f"Invalid date {value!r}: {reason}")


class Trimester(str, Enum):
    first = "first"
    second = "second"
    third = "third"


# ---------------------------------------------------------------------------
# Parse boundary
# ---------------------------------------------------------------------------


def _to_calendar_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def parse_date(value: DateInput) -> date:
    """Normalize a date, datetime or ISO-8601 string to a calendar date.

    Accepts ``YYYY-MM-DD`` and full timestamps (``2026-01-05T08:30:00Z``,
    offsets allowed).  Timezone-aware values are converted to UTC before the
    time of day is dropped.

    Raises:
        ParseError: If ``value`` is a malformed string or an unsupported type.
    """
    # datetime is a date subclass, so check it first
    if isinstance(value, datetime):
        return _to_calendar_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ParseError(value, f"unsupported type {type(value).__name__}")

    text = value.strip()
    if not text:
        raise ParseError(value, "empty string")

    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise ParseError(value, str(exc)) from exc

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _to_calendar_date(datetime.fromisoformat(text))
    except ValueError as exc:
        raise ParseError(value, str(exc)) from exc


def format_date_for_database(value: DateInput) -> str:
    """Format a date as ``YYYY-MM-DD`` (UTC calendar date, no time of day)."""
    return parse_date(value).isoformat()


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


def calculate_due_date(last_period_date: DateInput) -> date:
    """Due date from the first day of the last period (LMP + 40 weeks - 7 days)."""
    return parse_date(last_period_date) + _LMP_TO_DUE


def due_date_to_lmp(due_date: DateInput) -> date:
    """First day of the last period from a due date.  Inverse of :func:`calculate_due_date`."""
    return parse_date(due_date) - _LMP_TO_DUE


def calculate_days_passed(last_period_date: DateInput, as_of: DateInput) -> int:
    """Days since the LMP.  Negative when the LMP is after ``as_of``."""
    return (parse_date(as_of) - parse_date(last_period_date)).days


def calculate_days_remaining(due_date: DateInput, as_of: DateInput) -> int:
    """Days until the due date.  Negative once overdue."""
    return (parse_date(due_date) - parse_date(as_of)).days


def calculate_current_week(last_period_date: DateInput, as_of: DateInput) -> int:
    """Current pregnancy week, counting the LMP week as week 1.

    Whole weeks are truncated toward zero.  The result is clamped to
    ``[MIN_WEEK, MAX_WEEK]`` so a future-dated or very old LMP still yields a
    displayable week.
    """
    days = calculate_days_passed(last_period_date, as_of)
    whole_weeks = days // 7 if days >= 0 else -(-days // 7)
    return max(MIN_WEEK, min(MAX_WEEK, whole_weeks + 1))


def calculate_trimester(week: int) -> Trimester:
    if week <= FIRST_TRIMESTER_LAST_WEEK:
        return Trimester.first
    if week <= SECOND_TRIMESTER_LAST_WEEK:
        return Trimester.second
    return Trimester.third
