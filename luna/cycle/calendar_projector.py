"""Project tracked state onto a month calendar.

Each cell's period status comes from the day's own log when it records a
flow, and otherwise from *every* stored cycle, not just the one active for
the reference date, since the calendar shows past and future months alike.
"""

from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping

from luna.cycle.config_loader import CycleConfig, get_cycle_config
from luna.cycle.dates import days_between
from luna.cycle.records import CycleRecord, DailyLog, Flow, Snapshot


@dataclass(frozen=True)
class CalendarDay:
    """One populated calendar cell.

    Attributes:
        date:             The cell's date.
        flow:             Display flow status, or None for no period.
        is_reference_day: True for the user's "viewed as today" date.
        has_log:          A log entry exists for this date.
        intimacy:         Intimacy recorded on this date.
        love_count:       Love taps on this date.
        love_level:       Heart tier (0 none, then 1..N per config thresholds).
        show_log_dot:     A log exists but nothing else decorates the cell.
    """

    date: date
    flow: Flow | None
    is_reference_day: bool
    has_log: bool
    intimacy: bool
    love_count: int
    love_level: int
    show_log_dot: bool


def period_status(
    day: date,
    cycles: Iterable[CycleRecord],
    logs: Mapping[date, DailyLog],
    config: CycleConfig | None = None,
) -> Flow | None:
    """Return the display flow for ``day``.

    An explicit logged flow wins.  Otherwise the day counts as ``Medium`` if
    it falls in any closed record's ``[start, end)`` or within the safety
    window of any open record.
    """
    log = logs.get(day)
    if log is not None and log.flow is not None:
        return log.flow

    limit = (config or get_cycle_config()).cycle.safety_period_limit_days
    for cycle in cycles:
        if cycle.end is not None:
            if cycle.contains(day):
                return Flow.medium
        elif 0 <= days_between(day, cycle.start) < limit:
            return Flow.medium
    return None


def love_level(count: int, config: CycleConfig | None = None) -> int:
    """Map a love count to its heart tier: 0 for none, up to ``len(love_levels)``."""
    thresholds = (config or get_cycle_config()).calendar.love_levels
    return sum(1 for t in thresholds if count >= t)


def month_grid(year: int, month: int, first_weekday: int = 6) -> list[date | None]:
    """Return the cells of a month: leading ``None`` padding, then every day.

    ``first_weekday`` follows ``date.weekday()`` numbering; 6 gives a
    Sunday-first grid.
    """
    first = date(year, month, 1)
    padding = (first.weekday() - first_weekday) % 7
    days_in_month = _calendar.monthrange(year, month)[1]
    cells: list[date | None] = [None] * padding
    cells.extend(date(year, month, d) for d in range(1, days_in_month + 1))
    return cells


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or back) and return ``(year, month)``."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def project_month(
    year: int,
    month: int,
    snapshot: Snapshot,
    reference_date: date,
    config: CycleConfig | None = None,
) -> list[CalendarDay | None]:
    """Build the decorated calendar grid for one month.

    Args:
        year, month:    Month to render.
        snapshot:       Current tracked state.
        reference_date: The user's "viewed as today" date.
        config:         Cycle config (defaults to the global singleton).

    Returns:
        Grid cells; ``None`` entries pad the first week.
    """
    config = config or get_cycle_config()
    cells: list[CalendarDay | None] = []
    for day in month_grid(year, month, config.calendar.first_weekday):
        if day is None:
            cells.append(None)
            continue

        log = snapshot.logs.get(day)
        flow = period_status(day, snapshot.cycles, snapshot.logs, config)
        is_ref = day == reference_date
        count = log.love_count if log else 0
        intimacy = bool(log and log.intimacy)
        cells.append(
            CalendarDay(
                date=day,
                flow=flow,
                is_reference_day=is_ref,
                has_log=log is not None,
                intimacy=intimacy,
                love_count=count,
                love_level=love_level(count, config),
                show_log_dot=(
                    log is not None
                    and flow is None
                    and not is_ref
                    and not intimacy
                    and count == 0
                ),
            )
        )
    return cells
