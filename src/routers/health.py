"""Health check endpoint — public, no auth required."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from src.config import get_settings
from src.journey.config_loader import get_journey_config
from src.models.base import utc_now

router = APIRouter(tags=["system"])
logger = logging.getLogger("nestling.health")


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also reports whether the journey content catalog loaded.
    """
    settings = get_settings()
    config_version = None
    try:
        config_version = get_journey_config().version
    except (OSError, ValueError) as exc:
        logger.warning("Health check config probe failed: %s", exc)

    return {
        "status": "healthy" if config_version else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "journey_config": config_version or "unavailable",
        "timestamp": utc_now().isoformat(),
    }
