"""Period selection and calendar arithmetic for statistics."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from enum import Enum

from .formatting import period_label


class Period(str, Enum):
    """Time windows offered on the statistics screen."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"
    YEAR = "year"

    def label(self, locale: str | None = None) -> str:
        return period_label(self.value, locale)


@dataclass(frozen=True, slots=True)
class PeriodRange:
    """Start of the current window and start of the equivalent window before it."""

    start_date: datetime
    previous_period_start_date: datetime


def align(value: datetime, reference: datetime) -> datetime:
    """Express ``value`` on the same clock as ``reference`` so the two compare safely.

    Aware values are converted to the reference's zone; naive values are taken
    to already be local wall-clock times.
    """

    if value.tzinfo is not None and reference.tzinfo is not None:
        return value.astimezone(reference.tzinfo)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    if reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    return value


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def add_days(value: datetime, days: int) -> datetime:
    """Shift by whole calendar days, keeping the local wall-clock time."""

    return datetime.combine(value.date() + timedelta(days=days), value.timetz())


def add_months(value: datetime, months: int) -> datetime:
    """Shift by calendar months, clamping the day to the target month's length."""

    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def days_between(start: datetime, end: datetime) -> int:
    """Whole calendar days from ``start``'s date to ``end``'s date."""

    return (end.date() - start.date()).days


def _period_start(period: Period, now: datetime, week_start: int) -> datetime:
    today = start_of_day(now)
    if period is Period.WEEK:
        return add_days(today, -((now.weekday() - week_start) % 7))
    if period is Period.MONTH:
        return today.replace(day=1)
    if period is Period.THREE_MONTHS:
        return add_months(now, -3)
    return today.replace(month=1, day=1)


def _previous_start(period: Period, start: datetime) -> datetime:
    if period is Period.WEEK:
        return add_days(start, -7)
    if period is Period.MONTH:
        return add_months(start, -1)
    if period is Period.THREE_MONTHS:
        return add_months(start, -3)
    return add_months(start, -12)


def resolve_period(period: Period | str, now: datetime, *, week_start: int = 0) -> PeriodRange:
    """Resolve ``period`` relative to ``now``.

    ``week_start`` follows Python's weekday numbering (0=Monday, the ISO week).
    The three-month window rolls back from ``now`` instead of snapping to a
    quarter, and its previous window is the three months before that.
    Calendar overflow falls back to ``now`` (and to the start for the previous bound).
    """

    period = Period(period)
    try:
        start = _period_start(period, now, week_start)
    except (ValueError, OverflowError):
        start = now
    try:
        previous = _previous_start(period, start)
    except (ValueError, OverflowError):
        previous = start
    return PeriodRange(start_date=start, previous_period_start_date=previous)


__all__ = [
    "Period",
    "PeriodRange",
    "add_days",
    "add_months",
    "align",
    "days_between",
    "resolve_period",
    "start_of_day",
]
