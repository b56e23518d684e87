"""SQLModel tables backing the offline cache."""

from __future__ import annotations

from datetime import datetime, time, timezone
from typing import ClassVar, Optional
from uuid import UUID

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from .expense import Expense
from .habit import Habit, ReminderConfig
from .serialization import parse_timestamp


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class HabitEntity(SQLModel, table=True):
    """Cached copy of a habit row for one user."""

    __tablename__: ClassVar[str] = "habit_cache"

    id: UUID = Field(primary_key=True)
    user_id: UUID = Field(nullable=False, index=True)
    title: str = Field(nullable=False, max_length=255)
    completed: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    reminder_enabled: bool = Field(default=False, nullable=False)
    reminder_time: Optional[time] = Field(default=None)
    reminder_days: Optional[list[int]] = Field(default=None, sa_column=Column(JSON))

    @classmethod
    def from_record(cls, habit: Habit) -> "HabitEntity":
        reminder = habit.reminder
        return cls(
            id=habit.id,
            user_id=habit.user_id,
            title=habit.title,
            completed=habit.completed,
            created_at=_to_utc(habit.created_at),
            reminder_enabled=bool(reminder and reminder.enabled),
            reminder_time=reminder.time if reminder else None,
            reminder_days=list(reminder.weekdays) if reminder else None,
        )

    def to_record(self) -> Habit:
        reminder = None
        if self.reminder_enabled or self.reminder_time is not None or self.reminder_days:
            reminder = ReminderConfig(
                enabled=self.reminder_enabled,
                time=self.reminder_time,
                weekdays=tuple(int(day) for day in (self.reminder_days or ())),
            )
        return Habit(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            completed=self.completed,
            created_at=parse_timestamp(self.created_at),
            reminder=reminder,
        )


class ExpenseEntity(SQLModel, table=True):
    """Cached copy of an expense row for one user."""

    __tablename__: ClassVar[str] = "expense_cache"

    id: UUID = Field(primary_key=True)
    user_id: UUID = Field(nullable=False, index=True)
    category: str = Field(nullable=False, max_length=255)
    amount: float = Field(nullable=False)
    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )

    @classmethod
    def from_record(cls, expense: Expense) -> "ExpenseEntity":
        return cls(
            id=expense.id,
            user_id=expense.user_id,
            category=expense.category,
            amount=expense.amount,
            created_at=_to_utc(expense.created_at),
        )

    def to_record(self) -> Expense:
        return Expense(
            id=self.id,
            user_id=self.user_id,
            category=self.category,
            amount=float(self.amount),
            created_at=parse_timestamp(self.created_at),
        )
