"""SQLModel implementation of the offline record cache."""

from __future__ import annotations

from typing import Callable, ContextManager, Iterable
from uuid import UUID

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.cache import ExpenseEntity, HabitEntity
from ...models.expense import Expense
from ...models.habit import Habit

logger = get_logger(__name__)


def _owner(records: list) -> UUID:
    # The first record decides whose rows get replaced.
    return records[0].user_id


def _decode(rows: Iterable, kind: str) -> list:
    records = []
    for row in rows:
        try:
            records.append(row.to_record())
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Skipping unreadable cache row",
                extra={"kind": kind, "row_id": str(row.id), "error": str(exc)},
            )
    return records


class SQLModelRecordCache:
    """Keeps the last fetched habits and expenses per user in SQLite."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def save_habits(self, habits: list[Habit]) -> None:
        """Replace the owner's cached habits. An empty list leaves the cache alone."""
        if not habits:
            return
        user_id = _owner(habits)
        with self.session_factory() as session:
            stale = session.exec(select(HabitEntity).where(HabitEntity.user_id == user_id)).all()
            for row in stale:
                session.delete(row)
            session.flush()
            session.add_all(HabitEntity.from_record(habit) for habit in habits)
        logger.debug("Cached habits", extra={"user_id": str(user_id), "count": len(habits)})

    def fetch_habits(self, user_id: UUID) -> list[Habit]:
        with self.session_factory() as session:
            statement = (
                select(HabitEntity)
                .where(HabitEntity.user_id == user_id)
                .order_by(HabitEntity.created_at.desc())  # type: ignore[attr-defined]
            )
            return _decode(session.exec(statement).all(), "habit")

    def save_expenses(self, expenses: list[Expense]) -> None:
        """Replace the owner's cached expenses. An empty list leaves the cache alone."""
        if not expenses:
            return
        user_id = _owner(expenses)
        with self.session_factory() as session:
            stale = session.exec(select(ExpenseEntity).where(ExpenseEntity.user_id == user_id)).all()
            for row in stale:
                session.delete(row)
            session.flush()
            session.add_all(ExpenseEntity.from_record(expense) for expense in expenses)
        logger.debug("Cached expenses", extra={"user_id": str(user_id), "count": len(expenses)})

    def fetch_expenses(self, user_id: UUID) -> list[Expense]:
        with self.session_factory() as session:
            statement = (
                select(ExpenseEntity)
                .where(ExpenseEntity.user_id == user_id)
                .order_by(ExpenseEntity.created_at.desc())  # type: ignore[attr-defined]
            )
            return _decode(session.exec(statement).all(), "expense")
