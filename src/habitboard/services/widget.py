"""Habit snapshot shared with the home-screen widget."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Sequence

from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.widget import WidgetHabit

logger = get_logger(__name__)

PREVIEW_SIZE = 3
REFRESH_INTERVAL = timedelta(hours=1)


class WidgetStore:
    """Reads and writes the widget's JSON array of habits."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def save(self, habits: Iterable[Habit]) -> list[WidgetHabit]:
        items = [WidgetHabit.from_habit(habit) for habit in habits]
        payload = json.dumps([item.to_json() for item in items], ensure_ascii=False)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Widget snapshot saved", extra={"path": str(self.path), "count": len(items)})
        return items

    def load(self) -> list[WidgetHabit]:
        """Saved habits, or an empty list when the file is missing or unreadable."""

        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Widget snapshot unreadable", extra={"path": str(self.path), "error": str(exc)})
            return []

        try:
            data = json.loads(raw)
            return [WidgetHabit.from_json(item) for item in data]
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning("Widget snapshot corrupt", extra={"path": str(self.path), "error": str(exc)})
            return []


@dataclass(frozen=True, slots=True)
class WidgetSummary:
    """What the widget renders: completion counts and a short preview."""

    completed: int
    total: int
    preview: tuple[WidgetHabit, ...]

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return self.completed / self.total

    @classmethod
    def from_habits(cls, items: Sequence[WidgetHabit]) -> "WidgetSummary":
        return cls(
            completed=sum(1 for item in items if item.is_completed),
            total=len(items),
            preview=tuple(items[:PREVIEW_SIZE]),
        )

    @staticmethod
    def next_refresh(now: datetime) -> datetime:
        return now + REFRESH_INTERVAL


__all__ = ["WidgetStore", "WidgetSummary"]
