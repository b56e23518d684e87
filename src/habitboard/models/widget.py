"""Lightweight habit view shared with the home-screen widget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .habit import Habit


@dataclass(frozen=True, slots=True)
class WidgetHabit:
    """One row of the widget snapshot. Keys match the widget's JSON decoder."""

    id: str
    title: str
    is_completed: bool

    @classmethod
    def from_habit(cls, habit: Habit) -> "WidgetHabit":
        return cls(id=str(habit.id).upper(), title=habit.title, is_completed=habit.completed)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WidgetHabit":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            is_completed=bool(data["isCompleted"]),
        )

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "isCompleted": self.is_completed}
