"""Tests for local-calendar date helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from luna.cycle.dates import add_days, days_between, format_date, parse_date, today


# ---------------------------------------------------------------------------
# format_date / parse_date
# ---------------------------------------------------------------------------


class TestFormatDate:
    def test_zero_pads_fields(self):
        assert format_date(date(2024, 1, 6)) == "2024-01-06"

    def test_late_evening_datetime_keeps_its_own_day(self):
        assert format_date(datetime(2024, 3, 31, 23, 59, 59)) == "2024-03-31"

    def test_early_morning_datetime_keeps_its_own_day(self):
        assert format_date(datetime(2024, 4, 1, 0, 0, 1)) == "2024-04-01"


class TestParseDate:
    def test_parses_iso_day(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    def test_round_trips_every_day_of_a_leap_year(self):
        day = date(2024, 1, 1)
        while day.year == 2024:
            assert parse_date(format_date(day)) == day
            day += timedelta(days=1)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_date("  2024-01-06\n") == date(2024, 1, 6)

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input_returns_fallback(self, text):
        assert parse_date(text, fallback=date(2024, 5, 5)) == date(2024, 5, 5)

    @pytest.mark.parametrize("text", ["2024-13-01", "2024-02-30", "yesterday", "2024/01/06", "2024-01"])
    def test_malformed_input_returns_fallback(self, text):
        assert parse_date(text, fallback=date(2024, 5, 5)) == date(2024, 5, 5)

    def test_without_fallback_uses_today(self):
        assert parse_date("not a date") == today()


# ---------------------------------------------------------------------------
# days_between / add_days
# ---------------------------------------------------------------------------


class TestDaysBetween:
    def test_counts_whole_days(self):
        assert days_between(date(2024, 1, 20), date(2024, 1, 1)) == 19

    def test_is_antisymmetric(self):
        a, b = date(2024, 3, 9), date(2024, 2, 27)
        assert days_between(a, b) == -days_between(b, a)

    def test_same_day_is_zero(self):
        assert days_between(date(2024, 1, 1), date(2024, 1, 1)) == 0

    def test_time_of_day_is_dropped(self):
        late = datetime(2024, 1, 2, 23, 30)
        early = datetime(2024, 1, 1, 0, 15)
        assert days_between(late, early) == 1

    def test_across_spring_forward_weekend(self):
        # 2024-03-10 is a DST transition in much of North America
        assert days_between(date(2024, 3, 11), date(2024, 3, 9)) == 2

    def test_across_leap_day(self):
        assert days_between(date(2024, 3, 1), date(2024, 2, 28)) == 2


class TestAddDays:
    def test_forward_across_month_end(self):
        assert add_days(date(2024, 1, 31), 1) == date(2024, 2, 1)

    def test_backward(self):
        assert add_days(date(2024, 3, 1), -1) == date(2024, 2, 29)

    def test_datetime_input_returns_date(self):
        result = add_days(datetime(2024, 1, 1, 22, 0), 5)
        assert result == date(2024, 1, 6)
        assert not isinstance(result, datetime)

    def test_inverse_of_days_between(self):
        start = date(2024, 1, 29)
        assert days_between(add_days(start, 29), start) == 29
