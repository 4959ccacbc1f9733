"""Nestling API — FastAPI application entry point.

Run locally:
    uvicorn src.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import get_settings
from src.journey.config_loader import get_journey_config
from src.journey.dates import ParseError
from src.routers import content, health, pregnancy

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("nestling")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting Nestling API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    # Fail at startup rather than on the first request if the catalog is bad
    get_journey_config()
    yield
    logger.info("Nestling API shut down")


# ---------- Error handlers ----------

async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    logger.info("Rejected malformed date on %s: %r", request.url.path, exc.value)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Nestling API",
        description=(
            "Pregnancy journey backend — due dates, gestational week, "
            "trimester, timeline milestones, and week/stage content gating."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(ParseError, parse_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside v1 prefix — always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(pregnancy.router, prefix=v1_prefix)
    app.include_router(content.router, prefix=v1_prefix)

    return app


app = create_app()
