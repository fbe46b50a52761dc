"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from luna.cycle.session import CycleSession
from luna.insights.base import InsightProvider


def get_session(request: Request) -> CycleSession:
    """Return the process-wide session created during app startup."""
    return request.app.state.session


def get_insight_provider(request: Request) -> InsightProvider:
    return request.app.state.insight_provider


# Annotated shortcuts for route signatures
Session = Annotated[CycleSession, Depends(get_session)]
Insights = Annotated[InsightProvider, Depends(get_insight_provider)]
