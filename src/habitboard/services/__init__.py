"""Statistics engine and application services."""

from .periods import Period, PeriodRange, resolve_period
from .stats import StatsSnapshot, build_snapshot

__all__ = ["Period", "PeriodRange", "StatsSnapshot", "build_snapshot", "resolve_period"]
