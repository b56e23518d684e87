"""Repository protocol definitions for domain layer."""

from .cache import RecordCache
from .changes import ChangeCallback, ChangeFeed
from .expense import ExpenseRepository
from .habit import UNSET, HabitRepository, Unset

__all__ = [
    "ChangeCallback",
    "ChangeFeed",
    "ExpenseRepository",
    "HabitRepository",
    "RecordCache",
    "UNSET",
    "Unset",
]
