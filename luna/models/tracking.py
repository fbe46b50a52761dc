"""Pydantic models for the tracking API: cycles, daily logs, status, calendar."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from luna.cycle.calendar_projector import CalendarDay
from luna.cycle.config_loader import CycleConfig, PhaseDetail
from luna.cycle.phase_engine import PhaseState
from luna.cycle.records import CyclePhase, CycleRecord, DailyLog, Flow
from luna.models.base import LunaBase


# ---------- Cycles ----------

class CycleRead(LunaBase):
    start_date: dt.date
    end_date: dt.date | None = None

    @classmethod
    def from_record(cls, record: CycleRecord) -> "CycleRead":
        return cls(start_date=record.start, end_date=record.end)


class EndPeriodRequest(LunaBase):
    """Optional explicit end date; the reference date is used when omitted."""

    date: dt.date | None = None


# ---------- Daily logs ----------

class DailyLogRead(LunaBase):
    date: dt.date
    flow: Flow | None = None
    mood: list[str] = Field(default_factory=list)
    symptoms: list[str] = Field(default_factory=list)
    note: str | None = None
    love_count: int = 0
    intimacy: bool = False

    @classmethod
    def from_log(cls, log: DailyLog) -> "DailyLogRead":
        return cls(
            date=log.date,
            flow=log.flow,
            mood=list(log.mood),
            symptoms=list(log.symptoms),
            note=log.note,
            love_count=log.love_count,
            intimacy=log.intimacy,
        )


class DailyLogSave(LunaBase):
    """Full save from the log editor.  The love counter is never edited here."""

    flow: Flow | None = None
    mood: list[str] = Field(default_factory=list)
    symptoms: list[str] = Field(default_factory=list)
    note: str | None = Field(default=None, max_length=2000)
    intimacy: bool = False


class DailyLogPatch(LunaBase):
    """Partial update; only fields that are sent are applied."""

    flow: Flow | None = None
    mood: list[str] | None = None
    symptoms: list[str] | None = None
    note: str | None = Field(default=None, max_length=2000)
    intimacy: bool | None = None
    love_delta: int = Field(default=0, ge=-1000, le=1000)
    toggle_intimacy: bool = False


class LogOptionsRead(LunaBase):
    moods: list[str]
    symptoms: list[str]
    flows: list[Flow]


# ---------- Status ----------

class PhaseDetailRead(LunaBase):
    name: str
    description: str
    days_range: str

    @classmethod
    def from_detail(cls, detail: PhaseDetail) -> "PhaseDetailRead":
        return cls(name=detail.name, description=detail.description, days_range=detail.days_range)


class StatusRead(LunaBase):
    reference_date: dt.date
    phase: CyclePhase | None = None
    cycle_day: int | None = None
    is_period_ongoing: bool = False
    active_cycle: CycleRead | None = None
    awaiting: str | None = None
    period_action: str
    details: PhaseDetailRead
    default_cycle_length: int
    love_count: int = 0
    intimacy: bool = False

    @classmethod
    def build(
        cls, state: PhaseState, log: DailyLog | None, config: CycleConfig
    ) -> "StatusRead":
        return cls(
            reference_date=state.reference_date,
            phase=state.phase,
            cycle_day=state.cycle_day,
            is_period_ongoing=state.is_period_ongoing,
            active_cycle=(
                CycleRead.from_record(state.active_cycle) if state.active_cycle else None
            ),
            awaiting=state.awaiting,
            period_action=state.period_action,
            details=PhaseDetailRead.from_detail(config.phase_detail(state.phase)),
            default_cycle_length=config.cycle.default_cycle_length_days,
            love_count=log.love_count if log else 0,
            intimacy=log.intimacy if log else False,
        )


class ActionResult(LunaBase):
    """Outcome of a user action plus the status it leaves behind."""

    changed: bool
    status: StatusRead


class ShiftRequest(LunaBase):
    days: int = Field(ge=-3650, le=3650)


# ---------- Calendar ----------

class CalendarDayRead(LunaBase):
    date: dt.date
    flow: Flow | None = None
    is_reference_day: bool = False
    has_log: bool = False
    intimacy: bool = False
    love_count: int = 0
    love_level: int = 0
    show_log_dot: bool = False

    @classmethod
    def from_day(cls, day: CalendarDay) -> "CalendarDayRead":
        return cls(
            date=day.date,
            flow=day.flow,
            is_reference_day=day.is_reference_day,
            has_log=day.has_log,
            intimacy=day.intimacy,
            love_count=day.love_count,
            love_level=day.love_level,
            show_log_dot=day.show_log_dot,
        )


class MonthRef(LunaBase):
    year: int
    month: int


class CalendarMonthRead(LunaBase):
    year: int
    month: int
    cells: list[CalendarDayRead | None]
    previous: MonthRef
    next: MonthRef


# ---------- Insights ----------

class InsightRead(LunaBase):
    reference_date: dt.date
    phase: CyclePhase | None = None
    cycle_day: int | None = None
    text: str
