"""Pregnancy timeline snapshot.

Combines the date calculator outputs into one immutable view of where a
pregnancy stands on a given day, plus the configured milestones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Sequence

from src.journey.config_loader import MilestoneDefinition, get_journey_config
from src.journey.dates import (
    DateInput,
    Trimester,
    calculate_current_week,
    calculate_days_passed,
    calculate_days_remaining,
    calculate_due_date,
    calculate_trimester,
    due_date_to_lmp,
    parse_date,
)


@dataclass(frozen=True)
class Milestone:
    key: str
    title: str
    week: int
    date: date
    completed: bool


@dataclass(frozen=True)
class PregnancyTimeline:
    """Where a pregnancy stands as of one day.

    Attributes:
        last_period_date: First day of the last menstrual period.
        due_date:         Estimated due date.
        current_week:     Pregnancy week, clamped to 1–42.
        trimester:        Trimester for ``current_week``.
        days_passed:      Days since the LMP (negative if the LMP is future-dated).
        days_remaining:   Days until the due date (negative once overdue).
        milestones:       Configured milestones, ordered by week.
    """

    last_period_date: date
    due_date: date
    current_week: int
    trimester: Trimester
    days_passed: int
    days_remaining: int
    milestones: list[Milestone] = field(default_factory=list)

    @property
    def next_milestone(self) -> Milestone | None:
        return next((m for m in self.milestones if not m.completed), None)


def build_timeline(
    last_period_date: DateInput,
    as_of: DateInput,
    milestones: Sequence[MilestoneDefinition] | None = None,
) -> PregnancyTimeline:
    """Build a timeline from the LMP.

    Args:
        last_period_date: LMP as a date or ISO-8601 string.
        as_of:            Reference day ("today").
        milestones:       Milestone definitions; defaults to the journey config.

    Raises:
        ParseError: If either date is malformed.
    """
    lmp = parse_date(last_period_date)
    today = parse_date(as_of)
    due = calculate_due_date(lmp)
    week = calculate_current_week(lmp, today)

    if milestones is None:
        milestones = get_journey_config().milestones

    return PregnancyTimeline(
        last_period_date=lmp,
        due_date=due,
        current_week=week,
        trimester=calculate_trimester(week),
        days_passed=calculate_days_passed(lmp, today),
        days_remaining=calculate_days_remaining(due, today),
        milestones=[
            Milestone(
                key=m.key,
                title=m.title,
                week=m.week,
                date=lmp + timedelta(weeks=m.week),
                completed=today >= lmp + timedelta(weeks=m.week),
            )
            for m in sorted(milestones, key=lambda m: m.week)
        ],
    )


def build_timeline_from_due_date(
    due_date: DateInput,
    as_of: DateInput,
    milestones: Sequence[MilestoneDefinition] | None = None,
) -> PregnancyTimeline:
    """Same as :func:`build_timeline`, anchored on a known due date."""
    return build_timeline(due_date_to_lmp(due_date), as_of, milestones)
