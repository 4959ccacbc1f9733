"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated

from fastapi import Depends

from src.journey.config_loader import JourneyConfig, get_journey_config


def get_today() -> date:
    """Reference day for time-relative calculations (UTC calendar date).

    This is the only place the API reads the wall clock.  Tests replace it
    via ``app.dependency_overrides``.
    """
    return datetime.now(timezone.utc).date()


# Annotated shortcuts for route signatures
Today = Annotated[date, Depends(get_today)]
JourneyConfigDep = Annotated[JourneyConfig, Depends(get_journey_config)]
