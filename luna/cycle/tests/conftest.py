"""Shared fixtures for the cycle engine tests."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from luna.cycle.config_loader import CycleConfig, load_cycle_config
from luna.cycle.records import Snapshot
from luna.cycle.session import CycleSession, ReferenceClock
from luna.cycle.store import CycleStore
from luna.models.snapshot import SnapshotDocument

# Fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

TEST_DATE = date(2024, 1, 1)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_config() -> CycleConfig:
    """Load the bundled cycle config for tests."""
    return load_cycle_config()


# ---------------------------------------------------------------------------
# JSON fixture loaders
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_history_raw() -> dict:
    return json.loads((FIXTURES_DIR / "cycle_history.json").read_text())


@pytest.fixture
def cycle_history(cycle_history_raw: dict) -> Snapshot:
    """Three recorded periods (two closed, one open) plus a few logs."""
    return SnapshotDocument.model_validate(cycle_history_raw).to_snapshot()


# ---------------------------------------------------------------------------
# Store / session fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def saved() -> list[Snapshot]:
    """Collects every snapshot the store hands to its change listener."""
    return []


@pytest.fixture
def store(cycle_config: CycleConfig, saved: list[Snapshot]) -> CycleStore:
    return CycleStore(config=cycle_config, on_change=saved.append)


@pytest.fixture
def session(store: CycleStore, cycle_config: CycleConfig) -> CycleSession:
    return CycleSession(store, clock=ReferenceClock(TEST_DATE), config=cycle_config)
