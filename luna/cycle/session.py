"""The single-actor session: store, reference clock, and derived views.

All user actions go through one ``CycleSession``.  Actions that say
"today" act on the reference date, which the user can move away from the
real wall-clock date to log retroactively or look ahead.
"""

from __future__ import annotations

import logging
from datetime import date

from luna.cycle.calendar_projector import CalendarDay, project_month
from luna.cycle.config_loader import CycleConfig, get_cycle_config
from luna.cycle.dates import add_days, today
from luna.cycle.phase_engine import PhaseState, infer_phase
from luna.cycle.records import DailyLog
from luna.cycle.store import CycleStore

logger = logging.getLogger("luna.cycle.session")


class ReferenceClock:
    """A user-controlled "today", shifted in whole days."""

    def __init__(self, start: date | None = None) -> None:
        self._today = start or today()

    @property
    def today(self) -> date:
        return self._today

    def shift(self, days: int) -> date:
        self._today = add_days(self._today, days)
        logger.info("Reference date shifted by %+d to %s", days, self._today.isoformat())
        return self._today

    def reset(self) -> date:
        self._today = today()
        logger.info("Reference date reset to %s", self._today.isoformat())
        return self._today


class CycleSession:
    """Binds a CycleStore to a ReferenceClock and answers every view query.

    Usage::

        session = CycleSession(CycleStore(on_change=snapshot_file.save))
        session.start_period_today()
        session.state().phase        # CyclePhase.menstrual
    """

    def __init__(
        self,
        store: CycleStore,
        clock: ReferenceClock | None = None,
        config: CycleConfig | None = None,
    ) -> None:
        self.store = store
        self.clock = clock or ReferenceClock()
        self.config = config or get_cycle_config()

    @property
    def reference_date(self) -> date:
        return self.clock.today

    def state(self) -> PhaseState:
        return infer_phase(self.store.cycles, self.clock.today, self.config)

    def reference_log(self) -> DailyLog | None:
        return self.store.get_log(self.clock.today)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def start_period_today(self) -> bool:
        return self.store.start_period(self.clock.today)

    def end_period_today(self, on: date | None = None) -> bool:
        """End the active period if it is still running on the reference date.

        Args:
            on: Explicit end date (e.g. yesterday); defaults to the reference date.
        """
        ref = self.clock.today
        return self.store.end_period(on or ref, self.state().active_cycle, reference_date=ref)

    def love_today(self) -> DailyLog:
        return self.store.increment_love(self.clock.today)

    def toggle_intimacy_today(self) -> DailyLog:
        return self.store.toggle_intimacy(self.clock.today)

    def calendar(self, year: int, month: int) -> list[CalendarDay | None]:
        return project_month(
            year, month, self.store.snapshot(), self.clock.today, self.config
        )
