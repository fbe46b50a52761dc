"""Month calendar with per-day period status and decorations."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Path

from luna.cycle.calendar_projector import shift_month
from luna.cycle.session import CycleSession
from luna.dependencies import Session
from luna.models.tracking import CalendarDayRead, CalendarMonthRead, MonthRef

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _month(session: CycleSession, year: int, month: int) -> CalendarMonthRead:
    cells = session.calendar(year, month)
    prev_y, prev_m = shift_month(year, month, -1)
    next_y, next_m = shift_month(year, month, 1)
    return CalendarMonthRead(
        year=year,
        month=month,
        cells=[CalendarDayRead.from_day(c) if c else None for c in cells],
        previous=MonthRef(year=prev_y, month=prev_m),
        next=MonthRef(year=next_y, month=next_m),
    )


@router.get("", response_model=CalendarMonthRead)
async def current_month(session: Session) -> Any:
    ref = session.reference_date
    return _month(session, ref.year, ref.month)


@router.get("/{year}/{month}", response_model=CalendarMonthRead)
async def month_view(
    session: Session,
    year: int = Path(ge=1, le=9998),
    month: int = Path(ge=1, le=12),
) -> Any:
    return _month(session, year, month)
