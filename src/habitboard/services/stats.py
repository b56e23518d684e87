"""Statistics over habits and expenses for a selected period.

Every function here is pure: inputs are never mutated, nothing is cached
between calls, and the current time is always passed in as ``now`` so one
evaluation sees a single consistent clock. Degenerate input (no records, no
completed habits, zero totals) yields empty or zero results instead of errors.

Habits carry no per-day completion history. A habit counts as "done on day X"
when it is completed and was created on day X; ``created_at`` stands in for
the last activity day throughout.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence, TypeVar, Union
from uuid import UUID

from ..constants.labels import NO_DATA
from ..models.expense import Expense
from ..models.habit import Habit
from .formatting import day_abbreviation, day_month_label, month_abbreviation, weekday_name
from .periods import (
    Period,
    PeriodRange,
    add_days,
    add_months,
    align,
    resolve_period,
    start_of_day,
)

Record = TypeVar("Record", bound=Union[Habit, Expense])

# Weekday bucket order (Sunday first) used when picking the best day.
_SUNDAY_FIRST = (6, 0, 1, 2, 3, 4, 5)


@dataclass(frozen=True, slots=True)
class HabitDayData:
    """Completed habits on one calendar day."""

    date: datetime
    count: int
    day_label: str


@dataclass(frozen=True, slots=True)
class HabitCompletionRate:
    habit_id: UUID
    title: str
    rate: float
    completed_days: int
    total_days: int


@dataclass(frozen=True, slots=True)
class CategoryExpense:
    category: str
    amount: float
    percentage: float


@dataclass(frozen=True, slots=True)
class ExpenseTimePoint:
    """Summed spend for one bucket starting at ``date``."""

    date: datetime
    amount: float
    period_label: str


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    """All statistics for one period, computed against a single ``now``."""

    period: Period
    now: datetime
    range: PeriodRange
    habits_in_period: list[Habit]
    expenses_in_period: list[Expense]
    expenses_in_previous_period: list[Expense]
    habits_per_day: list[HabitDayData]
    current_streak: int
    best_day_of_week: str
    completion_rates: list[HabitCompletionRate]
    completed_habits: int
    total_habits: int
    progress: float
    total_in_period: float
    total_in_previous_period: float
    change_percentage: Optional[float]
    expenses_by_category: list[CategoryExpense]
    top_categories: list[CategoryExpense]
    expenses_over_time: list[ExpenseTimePoint]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def filter_in_period(records: Iterable[Record], start: datetime) -> list[Record]:
    """Records created at or after ``start``, in input order."""

    return [record for record in records if align(record.created_at, start) >= start]


def filter_in_range(records: Iterable[Record], start: datetime, end: datetime) -> list[Record]:
    """Records with ``start <= created_at < end``."""

    return [
        record for record in records if start <= align(record.created_at, start) < end
    ]


def expenses_in_previous_period(
    expenses: Iterable[Expense], period_range: PeriodRange
) -> list[Expense]:
    return filter_in_range(
        expenses, period_range.previous_period_start_date, period_range.start_date
    )


# ---------------------------------------------------------------------------
# Habits
# ---------------------------------------------------------------------------


def _completed_days(habits: Iterable[Habit], reference: datetime) -> Counter[date]:
    """Completed habit counts keyed by local creation date."""

    return Counter(
        align(habit.created_at, reference).date() for habit in habits if habit.completed
    )


def habits_per_day(
    habits: Iterable[Habit], now: datetime, *, locale: str | None = None
) -> list[HabitDayData]:
    """Seven points, oldest first, for the week ending today (today included)."""

    counts = _completed_days(habits, now)
    today = start_of_day(now)
    points: list[HabitDayData] = []
    for offset in range(6, -1, -1):
        try:
            day = add_days(today, -offset)
        except OverflowError:
            continue
        points.append(
            HabitDayData(
                date=day,
                count=counts.get(day.date(), 0),
                day_label=day_abbreviation(day, locale),
            )
        )
    return points


def current_streak(habits: Iterable[Habit], now: datetime) -> int:
    """Consecutive active days walking back from today.

    A day with no activity yet does not reset the streak when it is today:
    counting then starts from yesterday.
    """

    active_days = set(_completed_days(habits, now))
    if not active_days:
        return 0

    cursor = now.date()
    if cursor not in active_days:
        if cursor == date.min:
            return 0
        cursor -= timedelta(days=1)

    streak = 0
    while cursor in active_days:
        streak += 1
        try:
            cursor -= timedelta(days=1)
        except OverflowError:
            break
    return streak


def best_day_of_week(
    habits: Iterable[Habit], *, tz: tzinfo | None = None, locale: str | None = None
) -> str:
    """Weekday name with the most completed habits, or ``NO_DATA``.

    Aware timestamps are read in ``tz``, or in the system local zone when it is
    omitted. Ties go to the first maximum in Sunday..Saturday order.
    """

    counts: Counter[int] = Counter()
    for habit in habits:
        if not habit.completed:
            continue
        created = habit.created_at
        if created.tzinfo is not None:
            created = created.astimezone(tz)
        counts[created.weekday()] += 1

    if not counts:
        return NO_DATA

    best = max(_SUNDAY_FIRST, key=lambda weekday: counts.get(weekday, 0))
    return weekday_name(best, locale)


def habit_completion_rates(
    habits_in_period: Iterable[Habit], period_start: datetime, now: datetime
) -> list[HabitCompletionRate]:
    """Completion rate per habit, highest first (stable for equal rates)."""

    today = now.date()
    period_day = align(period_start, now).date()
    rates: list[HabitCompletionRate] = []
    for habit in habits_in_period:
        effective_start = max(align(habit.created_at, now).date(), period_day)
        total_days = max(1, (today - effective_start).days)
        completed_days = 1 if habit.completed else 0
        rates.append(
            HabitCompletionRate(
                habit_id=habit.id,
                title=habit.title,
                rate=min(completed_days / total_days, 1.0),
                completed_days=completed_days,
                total_days=total_days,
            )
        )
    return sorted(rates, key=lambda item: item.rate, reverse=True)


def completion_progress(habits: Sequence[Habit]) -> tuple[int, int, float]:
    """Return (completed, total, fraction) over the given habits."""

    total = len(habits)
    completed = sum(1 for habit in habits if habit.completed)
    return completed, total, (completed / total if total else 0.0)


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


def total_amount(expenses: Iterable[Expense]) -> float:
    return sum((expense.amount for expense in expenses), 0.0)


def expenses_by_category(expenses_in_period: Iterable[Expense]) -> list[CategoryExpense]:
    """Totals per exact category label with their share of the period total.

    Sorted by amount descending; equal amounts keep first-appearance order.
    An all-zero period yields an empty list.
    """

    totals: dict[str, float] = {}
    for expense in expenses_in_period:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount

    grand_total = sum(totals.values(), 0.0)
    if grand_total <= 0:
        return []

    breakdown = [
        CategoryExpense(category=category, amount=amount, percentage=amount / grand_total * 100)
        for category, amount in totals.items()
    ]
    return sorted(breakdown, key=lambda item: item.amount, reverse=True)


def top_categories(breakdown: Iterable[CategoryExpense], limit: int = 3) -> list[CategoryExpense]:
    return list(breakdown)[:limit]


def expense_change_percentage(period_total: float, previous_period_total: float) -> Optional[float]:
    """Percent change against the previous period; ``None`` when there is nothing to compare."""

    if previous_period_total <= 0:
        return None
    return (period_total - previous_period_total) / previous_period_total * 100


def _sum_between(expenses: Sequence[Expense], start: datetime, end: datetime) -> float:
    return total_amount(filter_in_range(expenses, start, end))


def _daily_buckets(
    expenses: Sequence[Expense], start: datetime, now: datetime, count: int
) -> list[ExpenseTimePoint]:
    first_day = start_of_day(start)
    points: list[ExpenseTimePoint] = []
    for offset in range(count):
        try:
            day = add_days(first_day, offset)
            next_day = add_days(day, 1)
        except OverflowError:
            continue
        if day > now:
            continue
        points.append(
            ExpenseTimePoint(
                date=day,
                amount=_sum_between(expenses, day, next_day),
                period_label=day_month_label(day),
            )
        )
    return points


def _weekly_buckets(
    expenses: Sequence[Expense], start: datetime, now: datetime
) -> list[ExpenseTimePoint]:
    points: list[ExpenseTimePoint] = []
    current = start_of_day(start)
    while current <= now:
        try:
            week_end = add_days(current, 7)
        except OverflowError:
            break
        points.append(
            ExpenseTimePoint(
                date=current,
                amount=_sum_between(expenses, current, week_end),
                period_label=day_month_label(current),
            )
        )
        current = week_end
    return points


def _monthly_buckets(
    expenses: Sequence[Expense],
    start: datetime,
    now: datetime,
    count: int,
    locale: str | None,
) -> list[ExpenseTimePoint]:
    points: list[ExpenseTimePoint] = []
    for offset in range(count):
        try:
            month_start = add_months(start, offset)
            month_end = add_months(start, offset + 1)
        except (ValueError, OverflowError):
            continue
        if month_start > now:
            continue
        points.append(
            ExpenseTimePoint(
                date=month_start,
                amount=_sum_between(expenses, month_start, month_end),
                period_label=month_abbreviation(month_start.month, locale),
            )
        )
    return points


def expenses_over_time(
    expenses_in_period: Iterable[Expense],
    period: Period | str,
    now: datetime,
    *,
    all_expenses: Iterable[Expense] | None = None,
    period_start: datetime | None = None,
    week_start: int = 0,
    locale: str | None = None,
) -> list[ExpenseTimePoint]:
    """Spend series bucketed by day (week), by 7-day window (month, three months)
    or by calendar month (year). Buckets starting after ``now`` are left out.

    The yearly series sums ``all_expenses`` per month (defaults to the given
    expenses) rather than only the period-filtered ones.
    """

    period = Period(period)
    if period_start is None:
        period_start = resolve_period(period, now, week_start=week_start).start_date
    in_period = list(expenses_in_period)

    if period is Period.WEEK:
        return _daily_buckets(in_period, period_start, now, count=7)
    if period in (Period.MONTH, Period.THREE_MONTHS):
        return _weekly_buckets(in_period, period_start, now)
    every = in_period if all_expenses is None else list(all_expenses)
    return _monthly_buckets(every, period_start, now, count=12, locale=locale)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


def build_snapshot(
    habits: Sequence[Habit],
    expenses: Sequence[Expense],
    period: Period | str,
    now: datetime,
    *,
    locale: str | None = None,
    week_start: int = 0,
) -> StatsSnapshot:
    """Evaluate every statistic for ``period`` against the same ``now``."""

    period = Period(period)
    period_range = resolve_period(period, now, week_start=week_start)

    habits_now = filter_in_period(habits, period_range.start_date)
    expenses_now = filter_in_period(expenses, period_range.start_date)
    expenses_before = expenses_in_previous_period(expenses, period_range)

    total_now = total_amount(expenses_now)
    total_before = total_amount(expenses_before)
    breakdown = expenses_by_category(expenses_now)
    completed, total, progress = completion_progress(habits)

    return StatsSnapshot(
        period=period,
        now=now,
        range=period_range,
        habits_in_period=habits_now,
        expenses_in_period=expenses_now,
        expenses_in_previous_period=expenses_before,
        habits_per_day=habits_per_day(habits, now, locale=locale),
        current_streak=current_streak(habits, now),
        best_day_of_week=best_day_of_week(habits, tz=now.tzinfo, locale=locale),
        completion_rates=habit_completion_rates(habits_now, period_range.start_date, now),
        completed_habits=completed,
        total_habits=total,
        progress=progress,
        total_in_period=total_now,
        total_in_previous_period=total_before,
        change_percentage=expense_change_percentage(total_now, total_before),
        expenses_by_category=breakdown,
        top_categories=top_categories(breakdown),
        expenses_over_time=expenses_over_time(
            expenses_now,
            period,
            now,
            all_expenses=expenses,
            period_start=period_range.start_date,
            locale=locale,
        ),
    )


__all__ = [
    "CategoryExpense",
    "ExpenseTimePoint",
    "HabitCompletionRate",
    "HabitDayData",
    "StatsSnapshot",
    "best_day_of_week",
    "build_snapshot",
    "completion_progress",
    "current_streak",
    "expense_change_percentage",
    "expenses_by_category",
    "expenses_in_previous_period",
    "expenses_over_time",
    "filter_in_period",
    "filter_in_range",
    "habit_completion_rates",
    "habits_per_day",
    "top_categories",
    "total_amount",
]
