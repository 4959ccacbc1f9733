"""Pregnancy journey core for Nestling.

Modules:
    dates          — LMP / due date / week / trimester calculator
    gate           — Week and stage gating of journey content
    estimates      — Alternative due-date estimators and milestone dates
    timeline       — Pregnancy timeline snapshot
    config_loader  — Journey content catalog and milestones (YAML)
"""

from src.journey.dates import ParseError, Trimester
from src.journey.gate import VisibilityRule, disclose, should_show
from src.journey.timeline import PregnancyTimeline, build_timeline

__all__ = [
    "ParseError",
    "Trimester",
    "VisibilityRule",
    "disclose",
    "should_show",
    "PregnancyTimeline",
    "build_timeline",
]
