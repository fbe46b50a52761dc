"""Shared fixtures for insight provider tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from luna.cycle.config_loader import CycleConfig, load_cycle_config


@pytest.fixture
def cycle_config() -> CycleConfig:
    return load_cycle_config()


@pytest.fixture
def mock_anthropic() -> MagicMock:
    """An AsyncAnthropic stand-in whose messages.create replies with one text block."""
    block = MagicMock()
    block.text = "  Rest up and keep warm today.  "
    response = MagicMock()
    response.content = [block]

    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response)
    return client
