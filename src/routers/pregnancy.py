"""Pregnancy date calculation endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from src.dependencies import JourneyConfigDep, Today
from src.journey.dates import (
    ParseError,
    calculate_due_date,
    calculate_trimester,
    due_date_to_lmp,
    parse_date,
)
from src.journey.estimates import estimate_due_date
from src.journey.timeline import build_timeline
from src.models.base import ErrorDetail
from src.models.pregnancy import (
    DueDateRead,
    DueDateRequest,
    EstimateRead,
    EstimateRequest,
    LastPeriodRequest,
    TimelineRead,
    TrimesterRead,
)

router = APIRouter(
    prefix="/pregnancy",
    tags=["pregnancy"],
    responses={422: {"model": ErrorDetail}},
)
logger = logging.getLogger("nestling.api.pregnancy")


@router.post("/due-date", response_model=DueDateRead)
async def due_date_from_last_period(body: DueDateRequest) -> Any:
    lmp = parse_date(body.last_period_date)
    return {"last_period_date": lmp, "due_date": calculate_due_date(lmp)}


@router.post("/last-period", response_model=DueDateRead)
async def last_period_from_due_date(body: LastPeriodRequest) -> Any:
    due = parse_date(body.due_date)
    return {"last_period_date": due_date_to_lmp(due), "due_date": due}


@router.post("/estimate", response_model=EstimateRead)
async def estimate(body: EstimateRequest) -> Any:
    try:
        due = estimate_due_date(body.method, body.date, body.gestational_age_days)
    except ParseError:
        raise
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "method": body.method,
        "due_date": due,
        "last_period_date": due_date_to_lmp(due),
    }


@router.get("/timeline", response_model=TimelineRead)
async def timeline(
    today: Today,
    config: JourneyConfigDep,
    last_period_date: str | None = Query(default=None),
    due_date: str | None = Query(default=None),
) -> Any:
    if (last_period_date is None) == (due_date is None):
        raise HTTPException(
            status_code=400,
            detail="Provide exactly one of last_period_date or due_date",
        )
    if last_period_date is not None:
        lmp = parse_date(last_period_date)
    else:
        lmp = due_date_to_lmp(due_date)
    result = build_timeline(lmp, today, config.milestones)
    logger.debug("Timeline for LMP %s as of %s: week %d", lmp, today, result.current_week)
    return result


@router.get("/trimester/{week}", response_model=TrimesterRead)
async def trimester(week: int) -> Any:
    return {"week": week, "trimester": calculate_trimester(week)}
