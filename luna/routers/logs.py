"""Per-date log entries: read, editor save, partial update."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from luna.cycle.dates import parse_date
from luna.cycle.records import DailyLog, Flow
from luna.dependencies import Session
from luna.models.tracking import DailyLogPatch, DailyLogRead, DailyLogSave, LogOptionsRead

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("/options", response_model=LogOptionsRead)
async def log_options(session: Session) -> Any:
    return LogOptionsRead(
        moods=session.config.moods,
        symptoms=session.config.symptoms,
        flows=list(Flow),
    )


@router.get("/{log_date}", response_model=DailyLogRead)
async def get_log(log_date: str, session: Session) -> Any:
    day = parse_date(log_date, fallback=session.reference_date)
    log = session.store.get_log(day)
    if log is None:
        raise HTTPException(status_code=404, detail=f"No log for {day.isoformat()}")
    return DailyLogRead.from_log(log)


@router.put("/{log_date}", response_model=DailyLogRead)
async def save_log(log_date: str, session: Session, body: DailyLogSave) -> Any:
    day = parse_date(log_date, fallback=session.reference_date)
    saved = session.store.save_log(
        DailyLog(
            date=day,
            flow=body.flow,
            mood=tuple(body.mood),
            symptoms=tuple(body.symptoms),
            note=body.note or None,
            intimacy=body.intimacy,
        )
    )
    return DailyLogRead.from_log(saved)


@router.patch("/{log_date}", response_model=DailyLogRead)
async def patch_log(log_date: str, session: Session, body: DailyLogPatch) -> Any:
    day = parse_date(log_date, fallback=session.reference_date)
    updates = body.model_dump(exclude_unset=True)
    # a zero delta or a false toggle changes nothing
    for key in ("love_delta", "toggle_intimacy"):
        if not updates.get(key):
            updates.pop(key, None)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")
    return DailyLogRead.from_log(session.store.upsert_log(day, **updates))
