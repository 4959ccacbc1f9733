"""Journey content gating endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from src.dependencies import JourneyConfigDep
from src.journey.gate import should_show, visible_content
from src.models.pregnancy import ContentRead, VisibilityRead, VisibilityRequest

router = APIRouter(prefix="/content", tags=["content"])


@router.post("/visibility", response_model=VisibilityRead)
async def check_visibility(body: VisibilityRequest) -> Any:
    return {"visible": should_show(body.current_week, body.stage, body.rule.to_rule())}


@router.get("", response_model=ContentRead)
async def list_content(
    config: JourneyConfigDep,
    current_week: int = Query(ge=1),
    stage: str = Query(min_length=1),
) -> Any:
    """Content blocks to render for a week and stage, with fallbacks applied."""
    return {
        "current_week": current_week,
        "stage": stage,
        "content": visible_content(current_week, stage, config.catalog),
    }
