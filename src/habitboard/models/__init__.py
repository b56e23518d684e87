"""Record types and SQLModel cache tables."""

from .cache import ExpenseEntity, HabitEntity
from .expense import Expense
from .habit import Habit, ReminderConfig
from .session import SessionUser
from .widget import WidgetHabit

__all__ = [
    "Expense",
    "ExpenseEntity",
    "Habit",
    "HabitEntity",
    "ReminderConfig",
    "SessionUser",
    "WidgetHabit",
]
