"""Habit loading and mutations on top of the backend, cache, widget and reminders."""

from __future__ import annotations

from datetime import time
from typing import Callable, Optional, Sequence

from ..domain.repositories import ChangeFeed, HabitRepository, RecordCache
from ..infra.remote.habits import TABLE
from ..logging_config import get_logger
from ..models.habit import Habit, ReminderConfig
from ..models.session import SessionUser
from .notifications import ReminderScheduler
from .sync import LoadResult, load_with_fallback, remove_by_id, replace_by_id, watch_changes
from .widget import WidgetStore

logger = get_logger(__name__)


class HabitService:
    """Coordinates habit reads and writes.

    Mutations take the caller's current list and return a new one; the input
    list is never modified. Backend errors (``APIError``) propagate.
    """

    def __init__(
        self,
        remote: HabitRepository,
        cache: RecordCache,
        *,
        widget: Optional[WidgetStore] = None,
        reminders: Optional[ReminderScheduler] = None,
        changes: Optional[ChangeFeed] = None,
    ):
        self.remote = remote
        self.cache = cache
        self.widget = widget
        self.reminders = reminders
        self.changes = changes
        self._unwatch: Optional[Callable[[], None]] = None

    def cached(self, user: SessionUser) -> list[Habit]:
        return self.cache.fetch_habits(user.id)

    def load(self, user: SessionUser) -> LoadResult[Habit]:
        result = load_with_fallback(
            kind="habit",
            user_id=user.id,
            read_cache=lambda: self.cache.fetch_habits(user.id),
            fetch_remote=lambda: self.remote.fetch_habits(user),
            write_cache=self.cache.save_habits,
        )
        if not result.stale:
            self._refresh_widget(result.items)
        return result

    def add(self, user: SessionUser, habits: Sequence[Habit], title: str) -> list[Habit]:
        if not title.strip():
            raise ValueError("Habit title cannot be empty")
        created = self.remote.create_habit(user, title)
        updated = [created, *habits]
        self._refresh_widget(updated)
        return updated

    def toggle_completion(
        self, user: SessionUser, habits: Sequence[Habit], habit: Habit
    ) -> list[Habit]:
        stored = self.remote.update_habit(user, habit.id, completed=not habit.completed)
        updated = replace_by_id(list(habits), stored)
        self._refresh_widget(updated)
        return updated

    def update_reminder(
        self,
        user: SessionUser,
        habits: Sequence[Habit],
        habit: Habit,
        *,
        enabled: bool,
        at: Optional[time] = None,
        weekdays: Sequence[int] = (),
    ) -> list[Habit]:
        """Store the reminder settings, then schedule or cancel its notifications."""

        reminder = ReminderConfig(enabled=enabled, time=at, weekdays=tuple(weekdays))
        stored = self.remote.update_habit(user, habit.id, reminder=reminder)
        if self.reminders is not None:
            if enabled:
                self.reminders.schedule_for(stored)
            else:
                self.reminders.cancel_for(stored)
        return replace_by_id(list(habits), stored)

    def delete(self, user: SessionUser, habits: Sequence[Habit], habit: Habit) -> list[Habit]:
        self.remote.delete_habit(user, habit.id)
        if self.reminders is not None:
            self.reminders.cancel_for(habit)
        updated = remove_by_id(list(habits), habit.id)
        self._refresh_widget(updated)
        return updated

    def start_realtime(
        self, user: SessionUser, on_change: Callable[[LoadResult[Habit]], None]
    ) -> None:
        """Reload the user's habits whenever the backend reports a change."""

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

    def _refresh_widget(self, habits: Sequence[Habit]) -> None:
        if self.widget is None:
            return
        try:
            self.widget.save(habits)
        except OSError as exc:
            logger.warning(
                "Could not update widget snapshot",
                extra={"path": str(self.widget.path), "error": str(exc)},
            )
