"""Due-date estimation for onboarding.

A user may know their last period date or conception date, or have a dating
ultrasound.  Each path produces a due date; the LMP path delegates to
:func:`src.journey.dates.calculate_due_date` so the whole app agrees on one
LMP rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from src.journey.dates import (
    DateInput,
    calculate_due_date,
    due_date_to_lmp,
    parse_date,
)

# Full term measured from the LMP, in days (Naegele)
FULL_TERM_DAYS = 280

# Ovulation / conception is taken as day 14 of a 28-day cycle
CONCEPTION_OFFSET_DAYS = 14

MAX_PREGNANCY_WEEK = 40


class EstimationMethod(str, Enum):
    lmp = "lmp"
    conception = "conception"
    ultrasound = "ultrasound"


@dataclass(frozen=True)
class GestationalAge:
    """Gestational age split into whole weeks plus remaining days."""

    weeks: int
    days: int
    total_days: int

    @property
    def formatted(self) -> str:
        return f"{self.weeks}+{self.days} weeks"


def due_date_from_lmp(last_period_date: DateInput) -> date:
    return calculate_due_date(last_period_date)


def due_date_from_conception(conception_date: DateInput) -> date:
    """Conception date + 266 days."""
    return parse_date(conception_date) + timedelta(
        days=FULL_TERM_DAYS - CONCEPTION_OFFSET_DAYS
    )


def due_date_from_ultrasound(scan_date: DateInput, gestational_age_days: int) -> date:
    """Due date from a dating scan and the gestational age it measured.

    Args:
        scan_date:            Date of the ultrasound.
        gestational_age_days: Gestational age at the scan, in days.

    Raises:
        ValueError: If ``gestational_age_days`` is negative.
    """
    if gestational_age_days < 0:
        raise ValueError(
            f"gestational_age_days must be >= 0, got {gestational_age_days}"
        )
    return parse_date(scan_date) + timedelta(days=FULL_TERM_DAYS - gestational_age_days)


def estimate_due_date(
    method: EstimationMethod | str,
    value: DateInput,
    gestational_age_days: int | None = None,
) -> date:
    """Estimate a due date with the given method.

    Raises:
        ValueError: Unknown method, or ultrasound without a gestational age.
        ParseError: If ``value`` is not a valid date.
    """
    method = EstimationMethod(method)
    if method is EstimationMethod.lmp:
        return due_date_from_lmp(value)
    if method is EstimationMethod.conception:
        return due_date_from_conception(value)
    if gestational_age_days is None:
        raise ValueError("gestational_age_days is required for the ultrasound method")
    return due_date_from_ultrasound(value, gestational_age_days)


def calculate_gestational_age(last_period_date: DateInput, as_of: DateInput) -> GestationalAge:
    """Weeks + days since the LMP.  Zero when ``as_of`` precedes the LMP."""
    total = max(0, (parse_date(as_of) - parse_date(last_period_date)).days)
    return GestationalAge(weeks=total // 7, days=total % 7, total_days=total)


def pregnancy_week_from_due_date(due_date: DateInput, as_of: DateInput) -> int:
    """Pregnancy week counted back from the due date, clamped to ``[0, 40]``.

    Returns 0 when the due date is more than 40 weeks away.
    """
    days_to_due = (parse_date(due_date) - parse_date(as_of)).days
    week = MAX_PREGNANCY_WEEK - days_to_due // 7
    return max(0, min(MAX_PREGNANCY_WEEK, week))


def calculate_milestone_dates(due_date: DateInput) -> dict[str, date]:
    """Key calendar dates of a pregnancy, derived from the due date."""
    due = parse_date(due_date)
    lmp = due_date_to_lmp(due)
    return {
        "lmp_date": lmp,
        "first_trimester_end": lmp + timedelta(weeks=13),
        "second_trimester_end": lmp + timedelta(weeks=26),
        "viability_date": lmp + timedelta(weeks=24),
        "full_term_date": lmp + timedelta(weeks=37),
        "due_date": due,
    }
