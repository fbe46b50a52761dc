"""Cycle phase inference.

Given the recorded periods and a reference ("viewed as today") date, work
out the active cycle, the cycle day, whether a period is ongoing, and which
phase applies.  Everything is recomputed from scratch on each call; nothing
is cached between calls.

Phase order within a cycle::

    Menstrual → Follicular → Ovulation → Luteal → (next start) Menstrual

A phase of ``None`` is the explicit "awaiting" state: there is no record on
or before the reference date, or an open record has gone stale past the
safety limit and Luna waits for new input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from luna.cycle.config_loader import CycleConfig, get_cycle_config
from luna.cycle.dates import days_between
from luna.cycle.records import CyclePhase, CycleRecord

logger = logging.getLogger("luna.cycle.phase_engine")

# Reasons a PhaseState can have no phase
AWAITING_NO_RECORDS = "no_records"
AWAITING_NO_PRIOR_RECORD = "no_prior_record"
AWAITING_STALE_RECORD = "stale_record"


@dataclass(frozen=True)
class PhaseState:
    """Everything derived for one reference date.

    Attributes:
        reference_date:    The date the state was computed for.
        active_cycle:      Latest record starting on or before the reference date.
        cycle_day:         1-indexed day within the active cycle.
        is_period_ongoing: True while the active record still counts as bleeding.
        phase:             Classified phase, or None while awaiting input.
        awaiting:          Why ``phase`` is None (one of the AWAITING_* values).
    """

    reference_date: date
    active_cycle: CycleRecord | None = None
    cycle_day: int | None = None
    is_period_ongoing: bool = False
    phase: CyclePhase | None = None
    awaiting: str | None = None

    @property
    def period_action(self) -> str:
        """Which period button applies: ``"end"`` while ongoing, else ``"start"``."""
        return "end" if self.is_period_ongoing else "start"


def select_active_cycle(
    cycles: Iterable[CycleRecord], reference_date: date
) -> CycleRecord | None:
    """Return the record with the latest start on or before ``reference_date``."""
    past = [c for c in cycles if c.start <= reference_date]
    if not past:
        return None
    return max(past, key=lambda c: c.start)


def is_period_ongoing(
    record: CycleRecord | None,
    reference_date: date,
    config: CycleConfig | None = None,
) -> bool:
    """Whether ``record`` still counts as an ongoing period on ``reference_date``.

    A closed record is ongoing in ``[start, end)``; the end date itself is
    the first day without flow.  An open record is ongoing for the first
    ``safety_period_limit_days`` days only, so a forgotten "end" tap does
    not flag bleeding forever.
    """
    if record is None:
        return False
    if record.end is not None:
        return record.contains(reference_date)
    limit = (config or get_cycle_config()).cycle.safety_period_limit_days
    return 0 <= days_between(reference_date, record.start) < limit


def classify_cycle_day(cycle_day: int, config: CycleConfig | None = None) -> CyclePhase:
    """Classify a non-menstrual cycle day.

    Days before the ovulation window are follicular, days inside it are
    ovulation, and every later day is luteal with no upper bound.  Days
    below 1 are floored to 1.
    """
    phases = (config or get_cycle_config()).phases
    day = max(1, cycle_day)
    if day < phases.ovulation_start_day:
        return CyclePhase.follicular
    if day <= phases.ovulation_end_day:
        return CyclePhase.ovulation
    return CyclePhase.luteal


def infer_phase(
    cycles: Iterable[CycleRecord],
    reference_date: date,
    config: CycleConfig | None = None,
) -> PhaseState:
    """Compute the full phase state for ``reference_date``.

    Args:
        cycles:         Recorded periods, in any order.
        reference_date: The user's "viewed as today" date.
        config:         Cycle config (defaults to the global singleton).

    Returns:
        PhaseState for the reference date.
    """
    config = config or get_cycle_config()
    records = list(cycles)

    active = select_active_cycle(records, reference_date)
    if active is None:
        reason = AWAITING_NO_RECORDS if not records else AWAITING_NO_PRIOR_RECORD
        return PhaseState(reference_date=reference_date, awaiting=reason)

    raw_day = days_between(reference_date, active.start) + 1
    cycle_day = max(1, raw_day)
    ongoing = is_period_ongoing(active, reference_date, config)

    if ongoing:
        phase: CyclePhase | None = CyclePhase.menstrual
    elif active.is_open and cycle_day > config.cycle.safety_period_limit_days:
        logger.debug(
            "Open cycle from %s is stale on day %d; awaiting new input",
            active.start.isoformat(),
            cycle_day,
        )
        return PhaseState(
            reference_date=reference_date,
            active_cycle=active,
            cycle_day=cycle_day,
            awaiting=AWAITING_STALE_RECORD,
        )
    else:
        phase = classify_cycle_day(raw_day, config)

    return PhaseState(
        reference_date=reference_date,
        active_cycle=active,
        cycle_day=cycle_day,
        is_period_ongoing=ongoing,
        phase=phase,
    )
