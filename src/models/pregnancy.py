"""Pydantic models for pregnancy calculations and journey content.

Dates arrive as plain strings and are parsed by the journey calculator, so
malformed input surfaces as a single ``ParseError`` → 422 path.
"""

from __future__ import annotations

from datetime import date

from pydantic import Field

from src.journey.dates import Trimester
from src.journey.estimates import EstimationMethod
from src.journey.gate import VisibilityRule
from src.models.base import NestlingBase


# ---------- Due date conversions ----------

class DueDateRequest(NestlingBase):
    last_period_date: str = Field(min_length=1)


class LastPeriodRequest(NestlingBase):
    due_date: str = Field(min_length=1)


class DueDateRead(NestlingBase):
    last_period_date: date
    due_date: date


class EstimateRequest(NestlingBase):
    method: EstimationMethod
    date: str = Field(min_length=1)
    gestational_age_days: int | None = Field(default=None, ge=0, le=300)


class EstimateRead(DueDateRead):
    method: EstimationMethod


class TrimesterRead(NestlingBase):
    week: int
    trimester: Trimester


# ---------- Timeline ----------

class MilestoneRead(NestlingBase):
    key: str
    title: str
    week: int
    date: date
    completed: bool


class TimelineRead(NestlingBase):
    last_period_date: date
    due_date: date
    current_week: int
    trimester: Trimester
    days_passed: int
    days_remaining: int
    milestones: list[MilestoneRead]


# ---------- Content visibility ----------

class VisibilityRuleSchema(NestlingBase):
    min_week: int | None = None
    max_week: int | None = None
    stages: list[str] | None = None

    def to_rule(self) -> VisibilityRule:
        return VisibilityRule.from_dict(self.model_dump())


class VisibilityRequest(NestlingBase):
    current_week: int
    stage: str = Field(min_length=1)
    rule: VisibilityRuleSchema = Field(default_factory=VisibilityRuleSchema)


class VisibilityRead(NestlingBase):
    visible: bool


class ContentRead(NestlingBase):
    current_week: int
    stage: str
    content: dict[str, str]
