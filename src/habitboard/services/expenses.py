"""Expense loading and mutations on top of the backend and cache."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..domain.repositories import ChangeFeed, ExpenseRepository, RecordCache
from ..infra.remote.expenses import TABLE
from ..models.expense import Expense
from ..models.session import SessionUser
from .sync import LoadResult, load_with_fallback, remove_by_id, watch_changes


class ExpenseService:
    """Same contract as HabitService: new lists out, APIError propagates."""

    def __init__(
        self,
        remote: ExpenseRepository,
        cache: RecordCache,
        *,
        changes: Optional[ChangeFeed] = None,
    ):
        self.remote = remote
        self.cache = cache
        self.changes = changes
        self._unwatch: Optional[Callable[[], None]] = None

    def cached(self, user: SessionUser) -> list[Expense]:
        return self.cache.fetch_expenses(user.id)

    def load(self, user: SessionUser) -> LoadResult[Expense]:
        return load_with_fallback(
            kind="expense",
            user_id=user.id,
            read_cache=lambda: self.cache.fetch_expenses(user.id),
            fetch_remote=lambda: self.remote.fetch_expenses(user),
            write_cache=self.cache.save_expenses,
        )

    def add(
        self, user: SessionUser, expenses: Sequence[Expense], category: str, amount: float
    ) -> list[Expense]:
        if not category.strip():
            raise ValueError("Expense category cannot be empty")
        if amount < 0:
            raise ValueError("Expense amount cannot be negative")
        created = self.remote.create_expense(user, category, amount)
        return [created, *expenses]

    def delete(
        self, user: SessionUser, expenses: Sequence[Expense], expense: Expense
    ) -> list[Expense]:
        self.remote.delete_expense(user, expense.id)
        return remove_by_id(list(expenses), expense.id)

    def start_realtime(
        self, user: SessionUser, on_change: Callable[[LoadResult[Expense]], None]
    ) -> None:
        if self.changes is None:
            raise RuntimeError("No change feed configured")
        self.stop_realtime()
        self._unwatch = watch_changes(
            self.changes, table=TABLE, reload=lambda: self.load(user), on_change=on_change
        )

    def stop_realtime(self) -> None:
        if self._unwatch is not None:
            self._unwatch()
            self._unwatch = None
