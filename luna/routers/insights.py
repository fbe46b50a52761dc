"""Daily insight text for the reference date."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from luna.dependencies import Insights, Session
from luna.models.tracking import InsightRead

router = APIRouter(tags=["insights"])


@router.get("/insight", response_model=InsightRead)
async def get_insight(session: Session, provider: Insights) -> Any:
    state = session.state()
    log = session.reference_log()
    text = await provider.generate(
        state.phase,
        state.cycle_day,
        symptoms=log.symptoms if log else (),
        moods=log.mood if log else (),
    )
    return InsightRead(
        reference_date=state.reference_date,
        phase=state.phase,
        cycle_day=state.cycle_day,
        text=text,
    )
