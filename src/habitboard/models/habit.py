"""Habit record and its optional reminder configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, time
from typing import Any, Mapping, Optional
from uuid import UUID

from .serialization import (
    format_time_of_day,
    format_timestamp,
    parse_time_of_day,
    parse_timestamp,
)

# 0=Sunday .. 6=Saturday, as stored by the backend.
WEEKDAY_INDICES = range(7)


@dataclass(frozen=True, slots=True)
class ReminderConfig:
    """Weekly reminder settings attached to a habit."""

    enabled: bool = False
    time: Optional[time] = None
    weekdays: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.enabled and self.time is not None and bool(self.weekdays)


@dataclass(frozen=True, slots=True)
class Habit:
    """A user-defined habit as returned by the backend.

    ``completed`` is a point-in-time flag without history; statistics read
    ``created_at`` as the day the habit was last acted on.
    """

    id: UUID
    user_id: UUID
    title: str
    completed: bool
    created_at: datetime
    reminder: Optional[ReminderConfig] = None

    @property
    def is_reminder_enabled(self) -> bool:
        return self.reminder is not None and self.reminder.enabled

    @property
    def has_valid_reminder(self) -> bool:
        return self.reminder is not None and self.reminder.is_valid

    def with_completed(self, completed: bool) -> "Habit":
        return replace(self, completed=completed)

    def with_reminder(self, reminder: Optional[ReminderConfig]) -> "Habit":
        return replace(self, reminder=reminder)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Habit":
        """Build a habit from a backend/cache row (snake_case keys)."""

        reminder = None
        enabled = row.get("reminder_enabled")
        reminder_time = row.get("reminder_time")
        reminder_days = row.get("reminder_days")
        if enabled is not None or reminder_time or reminder_days:
            reminder = ReminderConfig(
                enabled=bool(enabled),
                time=parse_time_of_day(reminder_time),
                weekdays=tuple(int(day) for day in (reminder_days or ())),
            )
        return cls(
            id=UUID(str(row["id"])),
            user_id=UUID(str(row["user_id"])),
            title=str(row["title"]),
            completed=bool(row["completed"]),
            created_at=parse_timestamp(row["created_at"]),
            reminder=reminder,
        )

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "title": self.title,
            "completed": self.completed,
            "created_at": format_timestamp(self.created_at),
        }
        if self.reminder is not None:
            row.update(reminder_to_row(self.reminder))
        return row


def reminder_to_row(reminder: Optional[ReminderConfig]) -> dict[str, Any]:
    """Serialize reminder fields for a PATCH payload; ``None`` clears them."""

    if reminder is None:
        return {"reminder_enabled": False, "reminder_time": None, "reminder_days": None}
    return {
        "reminder_enabled": reminder.enabled,
        "reminder_time": format_time_of_day(reminder.time) if reminder.time else None,
        "reminder_days": list(reminder.weekdays),
    }


__all__ = ["Habit", "ReminderConfig", "WEEKDAY_INDICES", "reminder_to_row"]
