"""Local record cache protocol."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from ...models.expense import Expense
from ...models.habit import Habit


class RecordCache(Protocol):
    """Offline copy of the records last fetched from the backend."""

    def save_habits(self, habits: list[Habit]) -> None:
        """Replace the cached habits of the records' owner."""
        ...

    def fetch_habits(self, user_id: UUID) -> list[Habit]:
        """Cached habits for a user, newest first."""
        ...

    def save_expenses(self, expenses: list[Expense]) -> None:
        """Replace the cached expenses of the records' owner."""
        ...

    def fetch_expenses(self, user_id: UUID) -> list[Expense]:
        """Cached expenses for a user, newest first."""
        ...
