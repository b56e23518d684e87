"""Tests for the SQLite record cache."""

from __future__ import annotations

from datetime import datetime, time, timezone
from uuid import uuid4

from habitboard.config import TestingConfig
from habitboard.infra.database import bootstrap_database
from habitboard.infra.repositories import SQLModelRecordCache
from habitboard.models import HabitEntity, ReminderConfig


def test_habits_round_trip_newest_first(record_cache, habit_factory, session_user):
    reminder = ReminderConfig(enabled=True, time=time(7, 45), weekdays=(2, 4))
    older = habit_factory("Antiguo", days_ago=3)
    newer = habit_factory("Nuevo", days_ago=0, reminder=reminder)

    record_cache.save_habits([older, newer])
    cached = record_cache.fetch_habits(session_user.id)

    assert [h.title for h in cached] == ["Nuevo", "Antiguo"]
    assert cached[0].reminder == reminder
    assert cached[0].created_at == newer.created_at
    assert cached[0].created_at.tzinfo is not None


def test_save_replaces_previous_rows_of_the_user(record_cache, habit_factory, session_user):
    record_cache.save_habits([habit_factory("Viejo"), habit_factory("Otro viejo")])

    record_cache.save_habits([habit_factory("Reciente")])

    assert [h.title for h in record_cache.fetch_habits(session_user.id)] == ["Reciente"]


def test_save_only_touches_the_owning_user(record_cache, expense_factory, session_user):
    other_user = uuid4()
    record_cache.save_expenses([expense_factory("Ajeno", user_id=other_user)])

    record_cache.save_expenses([expense_factory("Propio")])

    assert [e.category for e in record_cache.fetch_expenses(other_user)] == ["Ajeno"]
    assert [e.category for e in record_cache.fetch_expenses(session_user.id)] == ["Propio"]


def test_empty_save_is_a_no_op(record_cache, expense_factory, session_user):
    record_cache.save_expenses([expense_factory(amount=3.5)])

    record_cache.save_expenses([])

    assert [e.amount for e in record_cache.fetch_expenses(session_user.id)] == [3.5]


def test_fetch_for_unknown_user_is_empty(record_cache):
    assert record_cache.fetch_habits(uuid4()) == []
    assert record_cache.fetch_expenses(uuid4()) == []


def test_unreadable_rows_are_skipped(record_cache, db_session, expense_factory, session_user, caplog):
    good = expense_factory("Bueno")
    record_cache.save_expenses([good])
    db_session.add(
        HabitEntity(
            id=uuid4(),
            user_id=session_user.id,
            title="Sin dias",
            completed=False,
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            reminder_enabled=True,
            reminder_days=["lunes"],
        )
    )
    db_session.commit()

    habits = record_cache.fetch_habits(session_user.id)
    expenses = record_cache.fetch_expenses(session_user.id)

    assert habits == []
    assert [e.category for e in expenses] == ["Bueno"]
    assert "Skipping unreadable cache row" in caplog.text


def test_bootstrap_database_creates_tables(tmp_path, habit_factory, session_user):
    engine, session_factory = bootstrap_database(TestingConfig(tmp_path))
    cache = SQLModelRecordCache(session_factory)

    cache.save_habits([habit_factory()])

    assert len(cache.fetch_habits(session_user.id)) == 1
    engine.dispose()
