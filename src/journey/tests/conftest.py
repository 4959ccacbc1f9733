"""Shared fixtures for journey calculator, gate and API tests."""

from __future__ import annotations

from datetime import date
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.dependencies import get_today
from src.journey.config_loader import JourneyConfig, load_journey_config

# Fixed "today" for every time-relative test
TEST_DATE = date(2026, 2, 23)

# LMP that puts TEST_DATE in week 21 (140 days earlier)
TEST_LMP = date(2025, 10, 6)


@pytest.fixture
def journey_config() -> JourneyConfig:
    """Load the bundled journey config for tests."""
    return load_journey_config()


@pytest.fixture
def client() -> Iterator[TestClient]:
    from src.main import app

    app.dependency_overrides[get_today] = lambda: TEST_DATE
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
