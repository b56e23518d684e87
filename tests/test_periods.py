"""Tests for period resolution and calendar arithmetic."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from habitboard.services.periods import (
    Period,
    add_days,
    add_months,
    align,
    days_between,
    resolve_period,
    start_of_day,
)

MADRID = ZoneInfo("Europe/Madrid")


@pytest.mark.parametrize("period", list(Period))
def test_previous_period_starts_before_current(period, now):
    period_range = resolve_period(period, now)
    assert period_range.previous_period_start_date < period_range.start_date
    assert period_range.start_date <= now


def test_week_starts_on_monday_midnight(now):
    period_range = resolve_period(Period.WEEK, now)

    assert period_range.start_date == datetime(2026, 10, 12, tzinfo=MADRID)
    assert period_range.previous_period_start_date == datetime(2026, 10, 5, tzinfo=MADRID)


def test_week_start_is_configurable(now):
    # The fixture clock is a Sunday, so a Sunday-based week begins today.
    period_range = resolve_period(Period.WEEK, now, week_start=6)

    assert period_range.start_date == datetime(2026, 10, 18, tzinfo=MADRID)


def test_month_and_year_start_at_midnight(now):
    month = resolve_period(Period.MONTH, now)
    year = resolve_period(Period.YEAR, now)

    assert month.start_date == datetime(2026, 10, 1, tzinfo=MADRID)
    assert month.previous_period_start_date == datetime(2026, 9, 1, tzinfo=MADRID)
    assert year.start_date == datetime(2026, 1, 1, tzinfo=MADRID)
    assert year.previous_period_start_date == datetime(2025, 1, 1, tzinfo=MADRID)


def test_three_months_is_a_rolling_window(now):
    period_range = resolve_period(Period.THREE_MONTHS, now)

    assert period_range.start_date == datetime(2026, 7, 18, 12, 0, tzinfo=MADRID)
    assert period_range.previous_period_start_date == datetime(2026, 4, 18, 12, 0, tzinfo=MADRID)


def test_resolve_period_accepts_string_values(now):
    assert resolve_period("month", now) == resolve_period(Period.MONTH, now)


def test_resolve_period_rejects_unknown_period(now):
    with pytest.raises(ValueError):
        resolve_period("fortnight", now)


def test_overflow_falls_back_instead_of_raising():
    earliest = datetime(1, 1, 1, 12, 0)

    period_range = resolve_period(Period.WEEK, earliest)

    assert period_range.start_date == datetime(1, 1, 1)
    assert period_range.previous_period_start_date == period_range.start_date


def test_add_months_clamps_to_month_length():
    assert add_months(datetime(2024, 3, 31), -1) == datetime(2024, 2, 29)
    assert add_months(datetime(2024, 2, 29), -12) == datetime(2023, 2, 28)
    assert add_months(datetime(2026, 1, 31), 1) == datetime(2026, 2, 28)
    assert add_months(datetime(2026, 11, 15), 2) == datetime(2027, 1, 15)


def test_add_days_keeps_wall_clock_across_dst():
    # Europe/Madrid leaves summer time on 25 October 2026.
    before = datetime(2026, 10, 24, 9, 0, tzinfo=MADRID)

    after = add_days(before, 2)

    assert after.hour == 9
    assert after.utcoffset() != before.utcoffset()


def test_start_of_day_and_days_between(now):
    assert start_of_day(now) == datetime(2026, 10, 18, tzinfo=MADRID)
    assert days_between(datetime(2026, 10, 1, 23, 0), datetime(2026, 10, 3, 1, 0)) == 2


def test_align_converts_aware_values_to_reference_zone(now):
    utc_value = datetime(2026, 10, 17, 23, 30, tzinfo=timezone.utc)

    aligned = align(utc_value, now)

    assert aligned.tzinfo == MADRID
    assert aligned.date() == datetime(2026, 10, 18).date()


def test_align_treats_naive_values_as_local(now):
    naive = datetime(2026, 10, 18, 1, 0)

    assert align(naive, now) == datetime(2026, 10, 18, 1, 0, tzinfo=MADRID)


def test_period_labels_are_spanish_by_default():
    assert Period.WEEK.label() == "Esta semana"
    assert Period.THREE_MONTHS.label() == "3 meses"
    assert Period.YEAR.label("en") == "This year"
