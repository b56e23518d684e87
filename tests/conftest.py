"""Pytest configuration and shared fixtures for HabitBoard tests.

Provides a fixed clock, record factories, an isolated SQLite cache and an
``httpx.MockTransport`` backed REST client, so nothing touches the network or
the real data directory.
"""

from __future__ import annotations

import json
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import Any, Callable
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import httpx
import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitboard.config import TestingConfig
from habitboard.infra.database import create_session_factory
from habitboard.infra.remote import RestClient
from habitboard.infra.repositories import SQLModelRecordCache
from habitboard.models import Expense, Habit, ReminderConfig, SessionUser

MADRID = ZoneInfo("Europe/Madrid")
USER_ID = UUID("7c9e6679-7425-40de-944b-e07fc1f90ae7")
SUPABASE_URL = "https://example.supabase.co"


# =============================================================================
# Clock and records
# =============================================================================


@pytest.fixture
def now() -> datetime:
    """Sunday 18 October 2026, midday in Madrid."""
    return datetime(2026, 10, 18, 12, 0, tzinfo=MADRID)


@pytest.fixture
def session_user() -> SessionUser:
    return SessionUser(id=USER_ID, email="maria@example.com", access_token="token-123")


@pytest.fixture
def habit_factory(now):
    """Factory for Habit records; ``days_ago`` is relative to the ``now`` fixture."""

    def _create_habit(
        title: str = "Leer 30 min",
        *,
        completed: bool = True,
        days_ago: int = 0,
        created_at: datetime | None = None,
        user_id: UUID = USER_ID,
        reminder: ReminderConfig | None = None,
    ) -> Habit:
        return Habit(
            id=uuid4(),
            user_id=user_id,
            title=title,
            completed=completed,
            created_at=created_at or (now - timedelta(days=days_ago)),
            reminder=reminder,
        )

    return _create_habit


@pytest.fixture
def expense_factory(now):
    """Factory for Expense records; ``days_ago`` is relative to the ``now`` fixture."""

    def _create_expense(
        category: str = "Comida",
        amount: float = 10.0,
        *,
        days_ago: int = 0,
        created_at: datetime | None = None,
        user_id: UUID = USER_ID,
    ) -> Expense:
        return Expense(
            id=uuid4(),
            user_id=user_id,
            category=category,
            amount=amount,
            created_at=created_at or (now - timedelta(days=days_ago)),
        )

    return _create_expense


@pytest.fixture
def reminder() -> ReminderConfig:
    """Monday/Wednesday/Friday at 08:30 (0=Sunday numbering)."""
    return ReminderConfig(enabled=True, time=time(8, 30), weekdays=(1, 3, 5))


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def data_dir(tmp_path) -> Path:
    path = tmp_path / "instance"
    path.mkdir()
    return path


@pytest.fixture
def test_config(data_dir) -> TestingConfig:
    return TestingConfig(data_dir)


@pytest.fixture(scope="function")
def db_engine():
    """Isolated SQLite database per test, removed afterwards."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def db_session(db_engine):
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def record_cache(session_factory) -> SQLModelRecordCache:
    return SQLModelRecordCache(session_factory)


# =============================================================================
# REST backend
# =============================================================================


@dataclass
class FakeBackend:
    """Routes requests to a handler and remembers what was sent."""

    handler: Callable[[httpx.Request], httpx.Response] | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is None:
            return httpx.Response(200, json=[])
        return self.handler(request)

    def respond_json(self, payload: Any, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=payload)

    def respond_text(self, text: str, status_code: int) -> None:
        self.handler = lambda request: httpx.Response(status_code, text=text)

    def fail(self, exc_type: type[httpx.TransportError] = httpx.ConnectError) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type("boom", request=request)

        self.handler = _raise

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def rest_client(backend):
    client = RestClient(SUPABASE_URL, "anon-key", transport=httpx.MockTransport(backend))
    yield client
    client.close()


def _habit_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "user_id": str(USER_ID),
        "title": "Meditar",
        "completed": False,
        "created_at": "2026-10-18T08:00:00Z",
    }
    row.update(overrides)
    return row


def _expense_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "user_id": str(USER_ID),
        "category": "Comida",
        "amount": 12.5,
        "created_at": "2026-10-18T08:00:00Z",
    }
    row.update(overrides)
    return row


@pytest.fixture
def habit_row():
    """Builder for backend habit JSON rows."""
    return _habit_row


@pytest.fixture
def expense_row():
    """Builder for backend expense JSON rows."""
    return _expense_row
