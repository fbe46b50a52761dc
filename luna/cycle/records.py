"""Core records for cycle tracking: periods, daily logs, and snapshots.

These dataclasses are the in-memory source of truth for the store, the
phase engine, and the calendar projector.  The persisted JSON shape lives
in ``luna.models.snapshot``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class Flow(str, Enum):
    """Menstrual flow intensity for a single day."""

    light = "Light"
    medium = "Medium"
    heavy = "Heavy"


class CyclePhase(str, Enum):
    """The four classified stages of a cycle."""

    menstrual = "Menstrual"
    follicular = "Follicular"
    ovulation = "Ovulation"
    luteal = "Luteal"


@dataclass(frozen=True)
class CycleRecord:
    """One menstrual period.

    Attributes:
        start: First day of menstrual flow.
        end:   First day *without* flow; None while the period is open.
    """

    start: date
    end: date | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end < self.start:
            raise ValueError(
                f"Cycle end {self.end.isoformat()} precedes start {self.start.isoformat()}"
            )

    @property
    def is_open(self) -> bool:
        return self.end is None

    def contains(self, day: date) -> bool:
        """True if ``day`` lies in ``[start, end)``.  Open records never match."""
        return self.end is not None and self.start <= day < self.end


@dataclass(frozen=True)
class DailyLog:
    """Everything logged for one calendar day.

    Attributes:
        date:       The day this log belongs to.
        flow:       Explicit flow intensity, if recorded.
        mood:       Selected moods (order of selection, no duplicates).
        symptoms:   Selected symptoms (order of selection, no duplicates).
        note:       Free-text note.
        love_count: "Miss you" taps for the day.
        intimacy:   Whether intimacy was recorded.
    """

    date: date
    flow: Flow | None = None
    mood: tuple[str, ...] = ()
    symptoms: tuple[str, ...] = ()
    note: str | None = None
    love_count: int = 0
    intimacy: bool = False

    @property
    def has_content(self) -> bool:
        return bool(
            self.flow
            or self.mood
            or self.symptoms
            or self.note
            or self.love_count
            or self.intimacy
        )


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the whole tracked state.

    Attributes:
        cycles:  Cycle records sorted ascending by start date.
        logs:    Read-only mapping of date → DailyLog.
        version: Incremented once per successful mutation.
    """

    cycles: tuple[CycleRecord, ...] = ()
    logs: Mapping[date, DailyLog] = field(default_factory=lambda: MappingProxyType({}))
    version: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.cycles and not self.logs


def unique(items: Iterable[object]) -> tuple[str, ...]:
    """Drop duplicates and blanks while keeping first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        text = str(item).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)
