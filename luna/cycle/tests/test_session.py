"""Tests for the reference clock and the single-actor session."""

from __future__ import annotations

from datetime import date

import pytest

from luna.cycle.dates import today
from luna.cycle.records import CyclePhase, CycleRecord, Flow
from luna.cycle.session import CycleSession, ReferenceClock
from luna.cycle.store import CycleStoreError
from luna.cycle.tests.conftest import TEST_DATE


class TestReferenceClock:
    def test_defaults_to_today(self):
        assert ReferenceClock().today == today()

    def test_shift_moves_by_whole_days(self):
        clock = ReferenceClock(date(2024, 1, 31))
        assert clock.shift(1) == date(2024, 2, 1)
        assert clock.shift(-2) == date(2024, 1, 30)

    def test_reset_returns_to_wall_clock(self):
        clock = ReferenceClock(date(2000, 1, 1))
        assert clock.reset() == today()


class TestCycleSession:
    def test_actions_use_reference_date(self, session: CycleSession):
        session.clock.shift(4)
        session.start_period_today()
        assert session.store.cycles[0].start == date(2024, 1, 5)

    def test_full_period_walkthrough(self, session: CycleSession):
        """Start on Jan 1, end on Jan 5, look ahead to Jan 20."""
        assert session.start_period_today() is True
        state = session.state()
        assert state.phase == CyclePhase.menstrual
        assert state.cycle_day == 1
        assert state.period_action == "end"

        session.clock.shift(4)
        assert session.end_period_today() is True
        assert session.store.cycles == (
            CycleRecord(start=TEST_DATE, end=date(2024, 1, 5)),
        )

        session.clock.shift(15)
        state = session.state()
        assert state.reference_date == date(2024, 1, 20)
        assert state.cycle_day == 20
        assert state.phase == CyclePhase.luteal
        assert state.period_action == "start"

    def test_end_with_explicit_yesterday(self, session: CycleSession):
        session.start_period_today()
        session.clock.shift(6)

        session.end_period_today(on=date(2024, 1, 6))

        assert session.store.cycles[0].end == date(2024, 1, 6)

    def test_end_on_start_day_removes_mis_tap(self, session: CycleSession):
        session.start_period_today()
        session.end_period_today()

        assert session.store.cycles == ()
        assert session.state().period_action == "start"

    def test_end_without_records_is_a_no_op(self, session: CycleSession):
        assert session.end_period_today() is False

    def test_love_three_times(self, session: CycleSession):
        for _ in range(3):
            session.love_today()

        log = session.reference_log()
        assert log.love_count == 3
        assert log.intimacy is False

    def test_toggle_intimacy_today(self, session: CycleSession):
        assert session.toggle_intimacy_today().intimacy is True
        assert session.reference_log().intimacy is True

    def test_reference_log_absent(self, session: CycleSession):
        assert session.reference_log() is None

    def test_calendar_marks_reference_day(self, session: CycleSession):
        session.start_period_today()
        cells = [c for c in session.calendar(2024, 1) if c is not None]

        assert cells[0].is_reference_day is True
        assert cells[0].flow == Flow.medium
        assert sum(c.is_reference_day for c in cells) == 1

    def test_stale_period_is_not_back_filled(self, session: CycleSession):
        session.start_period_today()
        session.clock.shift(39)

        assert session.end_period_today() is False
        assert session.store.cycles == (CycleRecord(start=TEST_DATE),)
        painted = [c for c in session.calendar(2024, 1) if c is not None and c.flow]
        assert len(painted) == 10

    def test_explicit_end_past_next_cycle_is_rejected(self, session: CycleSession):
        session.start_period_today()
        session.clock.shift(31)
        session.start_period_today()
        session.clock.shift(-29)

        with pytest.raises(CycleStoreError):
            session.end_period_today(on=date(2024, 3, 1))
        assert session.store.cycles[0].end is None
