"""Tests for per-date period status and the month calendar grid."""

from __future__ import annotations

from datetime import date
from types import MappingProxyType

import pytest

from luna.cycle.calendar_projector import (
    love_level,
    month_grid,
    period_status,
    project_month,
    shift_month,
)
from luna.cycle.config_loader import CycleConfig
from luna.cycle.records import CycleRecord, DailyLog, Flow, Snapshot


# ---------------------------------------------------------------------------
# Period status
# ---------------------------------------------------------------------------


class TestPeriodStatus:
    def test_logged_flow_wins(self, cycle_history: Snapshot, cycle_config: CycleConfig):
        flow = period_status(date(2024, 1, 1), cycle_history.cycles, cycle_history.logs, cycle_config)
        assert flow == Flow.heavy

    def test_inside_closed_record_defaults_to_medium(
        self, cycle_history: Snapshot, cycle_config: CycleConfig
    ):
        for d in (date(2024, 1, 2), date(2024, 1, 5)):
            assert period_status(d, cycle_history.cycles, cycle_history.logs, cycle_config) == Flow.medium

    def test_closed_record_end_day_is_clear(self, cycle_history: Snapshot, cycle_config: CycleConfig):
        assert period_status(date(2024, 1, 6), cycle_history.cycles, cycle_history.logs, cycle_config) is None

    def test_open_record_inside_safety_window(self, cycle_history: Snapshot, cycle_config: CycleConfig):
        assert period_status(date(2024, 3, 7), cycle_history.cycles, cycle_history.logs, cycle_config) == Flow.medium
        assert period_status(date(2024, 3, 8), cycle_history.cycles, cycle_history.logs, cycle_config) is None

    def test_logged_flow_outside_any_record(self, cycle_config: CycleConfig):
        logs = {date(2024, 5, 1): DailyLog(date=date(2024, 5, 1), flow=Flow.light)}
        assert period_status(date(2024, 5, 1), [], logs, cycle_config) == Flow.light

    def test_log_without_flow_falls_through(self, cycle_config: CycleConfig):
        cycles = [CycleRecord(start=date(2024, 1, 1), end=date(2024, 1, 6))]
        logs = {date(2024, 1, 3): DailyLog(date=date(2024, 1, 3), mood=("Tired",))}
        assert period_status(date(2024, 1, 3), cycles, logs, cycle_config) == Flow.medium

    def test_before_any_record(self, cycle_history: Snapshot, cycle_config: CycleConfig):
        assert period_status(date(2023, 12, 31), cycle_history.cycles, cycle_history.logs, cycle_config) is None


# ---------------------------------------------------------------------------
# Love tiers
# ---------------------------------------------------------------------------


class TestLoveLevel:
    @pytest.mark.parametrize(
        "count, level",
        [(0, 0), (1, 1), (2, 2), (5, 2), (6, 3), (40, 3)],
    )
    def test_default_thresholds(self, cycle_config: CycleConfig, count, level):
        assert love_level(count, cycle_config) == level


# ---------------------------------------------------------------------------
# Grid layout
# ---------------------------------------------------------------------------


class TestMonthGrid:
    def test_sunday_first_padding(self):
        # 2024-02-01 is a Thursday
        cells = month_grid(2024, 2, first_weekday=6)
        assert cells[:4] == [None, None, None, None]
        assert cells[4] == date(2024, 2, 1)
        assert len(cells) == 4 + 29

    def test_monday_first_padding(self):
        cells = month_grid(2024, 2, first_weekday=0)
        assert cells[:3] == [None, None, None]
        assert cells[3] == date(2024, 2, 1)

    def test_month_starting_on_week_start_has_no_padding(self):
        # 2023-10-01 is a Sunday
        assert month_grid(2023, 10, first_weekday=6)[0] == date(2023, 10, 1)

    def test_last_cell_is_month_end(self):
        assert month_grid(2023, 2)[-1] == date(2023, 2, 28)


class TestShiftMonth:
    @pytest.mark.parametrize(
        "year, month, delta, expected",
        [
            (2024, 1, -1, (2023, 12)),
            (2024, 12, 1, (2025, 1)),
            (2024, 5, 0, (2024, 5)),
            (2024, 3, 13, (2025, 4)),
            (2024, 3, -15, (2022, 12)),
        ],
    )
    def test_wraps_years(self, year, month, delta, expected):
        assert shift_month(year, month, delta) == expected


# ---------------------------------------------------------------------------
# Full projection
# ---------------------------------------------------------------------------


class TestProjectMonth:
    def _cells(self, snapshot: Snapshot, ref: date, config: CycleConfig) -> dict:
        grid = project_month(2024, 1, snapshot, ref, config)
        assert grid[0] is None  # 2024-01-01 is a Monday
        return {c.date: c for c in grid if c is not None}

    def test_decorations(self, cycle_history: Snapshot, cycle_config: CycleConfig):
        cells = self._cells(cycle_history, date(2024, 1, 14), cycle_config)

        first = cells[date(2024, 1, 1)]
        assert first.flow == Flow.heavy
        assert first.love_count == 2
        assert first.love_level == 2
        assert first.show_log_dot is False

        ref = cells[date(2024, 1, 14)]
        assert ref.is_reference_day is True
        assert ref.intimacy is True
        assert ref.show_log_dot is False

        assert cells[date(2024, 1, 3)].flow == Flow.medium
        assert cells[date(2024, 1, 3)].has_log is False
        assert cells[date(2024, 1, 6)].flow is None

    def test_log_dot_only_for_otherwise_plain_days(
        self, cycle_history: Snapshot, cycle_config: CycleConfig
    ):
        cells = self._cells(cycle_history, date(2024, 1, 14), cycle_config)

        assert cells[date(2024, 1, 20)].has_log is True
        assert cells[date(2024, 1, 20)].show_log_dot is True
        assert cells[date(2024, 1, 21)].show_log_dot is False

    def test_reference_day_suppresses_log_dot(
        self, cycle_history: Snapshot, cycle_config: CycleConfig
    ):
        cells = self._cells(cycle_history, date(2024, 1, 20), cycle_config)
        assert cells[date(2024, 1, 20)].show_log_dot is False

    def test_every_record_shown_regardless_of_reference(
        self, cycle_history: Snapshot, cycle_config: CycleConfig
    ):
        grid = project_month(2024, 3, cycle_history, date(2023, 6, 1), cycle_config)
        flows = {c.date: c.flow for c in grid if c is not None}

        assert flows[date(2024, 3, 1)] == Flow.medium
        assert flows[date(2024, 3, 7)] == Flow.medium
        assert flows[date(2024, 3, 8)] is None

    def test_empty_snapshot(self, cycle_config: CycleConfig):
        snapshot = Snapshot(logs=MappingProxyType({}))
        grid = project_month(2024, 1, snapshot, date(2024, 1, 1), cycle_config)
        days = [c for c in grid if c is not None]

        assert len(days) == 31
        assert all(c.flow is None and not c.has_log for c in days)
        assert days[0].is_reference_day is True
