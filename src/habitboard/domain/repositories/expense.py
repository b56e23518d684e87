"""Expense repository protocol."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from ...models.expense import Expense
from ...models.session import SessionUser


class ExpenseRepository(Protocol):
    """Remote store for a user's expenses."""

    def fetch_expenses(self, user: SessionUser) -> list[Expense]:
        """Return the user's expenses, newest first."""
        ...

    def create_expense(self, user: SessionUser, category: str, amount: float) -> Expense:
        """Create an expense and return the stored row."""
        ...

    def delete_expense(self, user: SessionUser, expense_id: UUID) -> None:
        """Delete an expense by ID."""
        ...
