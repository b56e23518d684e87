"""Habit repository backed by the REST ``habits`` table."""

from __future__ import annotations

from typing import Any, Optional, Union
from uuid import UUID

from ...domain.repositories.habit import UNSET, Unset
from ...logging_config import get_logger
from ...models.habit import Habit, ReminderConfig, reminder_to_row
from ...models.session import SessionUser
from .client import RestClient, decode_rows, first_row

logger = get_logger(__name__)

TABLE = "habits"


class RemoteHabitRepository:
    """REST implementation of HabitRepository protocol."""

    def __init__(self, client: RestClient):
        self.client = client

    def fetch_habits(self, user: SessionUser) -> list[Habit]:
        payload = self.client.request(
            "GET",
            TABLE,
            access_token=user.access_token,
            params={"user_id": f"eq.{user.id}", "order": "created_at.desc"},
        )
        habits = decode_rows(payload, Habit.from_row)
        logger.debug("Fetched habits", extra={"user_id": str(user.id), "count": len(habits)})
        return habits

    def create_habit(self, user: SessionUser, title: str) -> Habit:
        body = [{"title": title, "user_id": str(user.id), "completed": False}]
        payload = self.client.request("POST", TABLE, access_token=user.access_token, json=body)
        return first_row(payload, Habit.from_row)

    def update_habit(
        self,
        user: SessionUser,
        habit_id: UUID,
        *,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
        reminder: Union[ReminderConfig, None, Unset] = UNSET,
    ) -> Habit:
        body: dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if completed is not None:
            body["completed"] = completed
        if reminder is not UNSET:
            body.update(reminder_to_row(reminder))
        if not body:
            raise ValueError("update_habit needs at least one field to change")

        payload = self.client.request(
            "PATCH",
            TABLE,
            access_token=user.access_token,
            params={"id": f"eq.{habit_id}"},
            json=body,
        )
        return first_row(payload, Habit.from_row)

    def delete_habit(self, user: SessionUser, habit_id: UUID) -> None:
        self.client.request(
            "DELETE",
            TABLE,
            access_token=user.access_token,
            params={"id": f"eq.{habit_id}"},
        )
