"""Display helpers turning statistics into chart and card labels."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..constants.labels import (
    DAY_ABBREVIATIONS,
    DAY_NAMES,
    DEFAULT_LOCALE,
    MONTH_ABBREVIATIONS,
    NO_COMPARISON,
    PERIOD_LABELS,
)


def _locale(locale: str | None) -> str:
    if locale and locale in DAY_NAMES:
        return locale
    return DEFAULT_LOCALE


def day_abbreviation(day: date | datetime, locale: str | None = None) -> str:
    """Capitalised three-letter weekday label, e.g. ``Lun``."""

    return DAY_ABBREVIATIONS[_locale(locale)][day.weekday()]


def weekday_name(weekday: int, locale: str | None = None) -> str:
    """Full weekday name for a Python weekday index (0=Monday)."""

    return DAY_NAMES[_locale(locale)][weekday % 7]


def month_abbreviation(month: int, locale: str | None = None) -> str:
    return MONTH_ABBREVIATIONS[_locale(locale)][(month - 1) % 12]


def day_month_label(day: date | datetime) -> str:
    """Short ``d/M`` label used on daily and weekly buckets."""

    return f"{day.day}/{day.month}"


def period_label(period_value: str, locale: str | None = None) -> str:
    return PERIOD_LABELS[_locale(locale)].get(period_value, period_value)


def format_currency(value: float, symbol: str = "€") -> str:
    """Whole-unit currency string, e.g. ``€1,235``."""

    return f"{symbol}{value:,.0f}"


def format_currency_short(value: float, symbol: str = "€") -> str:
    """Compact axis label: ``€1.2k`` from one thousand upwards."""

    if value >= 1000:
        return f"{symbol}{value / 1000:.1f}k"
    return f"{symbol}{value:.0f}"


def format_percentage(value: float) -> str:
    return f"{value:.0f}%"


def format_change(change: Optional[float], locale: str | None = None) -> str:
    """Absolute period-over-period change with one decimal, or a no-data label."""

    if change is None:
        return NO_COMPARISON[_locale(locale)]
    return f"{abs(change):.1f}%"


__all__ = [
    "day_abbreviation",
    "day_month_label",
    "format_change",
    "format_currency",
    "format_currency_short",
    "format_percentage",
    "month_abbreviation",
    "period_label",
    "weekday_name",
]
