"""Shared fixtures for application-level tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from luna.config import Settings
from luna.cycle.session import ReferenceClock
from luna.main import create_app

# Fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

TEST_DATE = date(2024, 1, 1)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway snapshot file, AI off."""
    return Settings(data_path=str(tmp_path / "luna_state.json"), enable_ai=False)


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """A running app whose reference date is pinned to TEST_DATE."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        app.state.session.clock = ReferenceClock(TEST_DATE)
        yield test_client
