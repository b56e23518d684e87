"""Habit repository protocol."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, Union
from uuid import UUID

from ...models.habit import Habit, ReminderConfig
from ...models.session import SessionUser


class Unset(Enum):
    """Marker for "leave this field untouched" in partial updates."""

    UNSET = "UNSET"


UNSET = Unset.UNSET


class HabitRepository(Protocol):
    """Remote store for a user's habits."""

    def fetch_habits(self, user: SessionUser) -> list[Habit]:
        """Return the user's habits, newest first."""
        ...

    def create_habit(self, user: SessionUser, title: str) -> Habit:
        """Create a new, not yet completed habit."""
        ...

    def update_habit(
        self,
        user: SessionUser,
        habit_id: UUID,
        *,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
        reminder: Union[ReminderConfig, None, Unset] = UNSET,
    ) -> Habit:
        """Patch only the provided fields and return the stored habit."""
        ...

    def delete_habit(self, user: SessionUser, habit_id: UUID) -> None:
        """Delete a habit by ID."""
        ...
