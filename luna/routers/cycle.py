"""Home-screen actions: status, reference date, period start/end, love, intimacy."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from luna.cycle.session import CycleSession
from luna.cycle.store import CycleStoreError
from luna.dependencies import Session
from luna.models.base import ErrorDetail
from luna.models.tracking import (
    ActionResult,
    CycleRead,
    DailyLogRead,
    EndPeriodRequest,
    ShiftRequest,
    StatusRead,
)

router = APIRouter(tags=["cycle"])
logger = logging.getLogger("luna.routers.cycle")


def _status(session: CycleSession) -> StatusRead:
    return StatusRead.build(session.state(), session.reference_log(), session.config)


@router.get("/status", response_model=StatusRead)
async def get_status(session: Session) -> Any:
    return _status(session)


@router.get("/cycles", response_model=list[CycleRead])
async def list_cycles(session: Session) -> Any:
    return [CycleRead.from_record(c) for c in session.store.cycles]


# ---------- Reference date ----------

@router.post("/reference/shift", response_model=StatusRead)
async def shift_reference(session: Session, body: ShiftRequest) -> Any:
    session.clock.shift(body.days)
    return _status(session)


@router.post("/reference/reset", response_model=StatusRead)
async def reset_reference(session: Session) -> Any:
    session.clock.reset()
    return _status(session)


# ---------- Period ----------

@router.post("/period/start", response_model=ActionResult)
async def start_period(session: Session) -> Any:
    changed = session.start_period_today()
    return ActionResult(changed=changed, status=_status(session))


@router.post(
    "/period/end",
    response_model=ActionResult,
    responses={400: {"model": ErrorDetail}},
)
async def end_period(session: Session, body: EndPeriodRequest | None = None) -> Any:
    on = body.date if body else None
    try:
        changed = session.end_period_today(on)
    except CycleStoreError as exc:
        logger.warning("Rejected period end: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ActionResult(changed=changed, status=_status(session))


# ---------- Love / intimacy ----------

@router.post("/love", response_model=DailyLogRead)
async def love(session: Session) -> Any:
    return DailyLogRead.from_log(session.love_today())


@router.post("/intimacy", response_model=DailyLogRead)
async def toggle_intimacy(session: Session) -> Any:
    return DailyLogRead.from_log(session.toggle_intimacy_today())
