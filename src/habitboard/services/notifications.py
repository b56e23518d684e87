"""Weekly habit reminders scheduled on APScheduler."""

from __future__ import annotations

from datetime import tzinfo
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..logging_config import get_logger
from ..models.habit import WEEKDAY_INDICES, Habit

logger = get_logger(__name__)

REMINDER_TITLE = "Recordatorio de hábito"

# Cron day names indexed like Habit reminder weekdays (0=Sunday).
CRON_DAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")

Notifier = Callable[[str, str, str], None]


def log_notifier(identifier: str, title: str, body: str) -> None:
    """Default delivery: write the reminder to the log."""

    logger.info(title, extra={"notification_id": identifier, "body": body})


def notification_id(habit: Habit, weekday: int) -> str:
    return f"habit-{str(habit.id).upper()}-{weekday}"


def reminder_body(habit: Habit) -> str:
    return f"Es hora de: {habit.title}"


class ReminderScheduler:
    """Manages one repeating job per habit reminder weekday.

    Jobs can be added before ``start()``; APScheduler keeps them pending until
    the scheduler runs.
    """

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        *,
        scheduler: Optional[BackgroundScheduler] = None,
        timezone: Optional[tzinfo] = None,
    ):
        self.notifier = notifier or log_notifier
        self.timezone = timezone
        if scheduler is None:
            scheduler = BackgroundScheduler(timezone=timezone) if timezone else BackgroundScheduler()
        self.scheduler = scheduler

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Reminder scheduler started")

    def stop(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Reminder scheduler stopped")

    def schedule_for(self, habit: Habit) -> list[str]:
        """Replace the habit's reminder jobs; returns the ids now scheduled."""

        self.cancel_for(habit)
        reminder = habit.reminder
        if reminder is None or not reminder.is_valid:
            return []

        scheduled: list[str] = []
        for weekday in sorted(set(reminder.weekdays)):
            if weekday not in WEEKDAY_INDICES:
                logger.warning(
                    "Ignoring invalid reminder weekday",
                    extra={"habit_id": str(habit.id), "weekday": weekday},
                )
                continue
            identifier = notification_id(habit, weekday)
            trigger = CronTrigger(
                day_of_week=CRON_DAY_NAMES[weekday],
                hour=reminder.time.hour,
                minute=reminder.time.minute,
                timezone=self.timezone,
            )
            self.scheduler.add_job(
                func=self._deliver,
                trigger=trigger,
                args=(identifier, REMINDER_TITLE, reminder_body(habit)),
                id=identifier,
                name=f"Reminder: {habit.title}",
                replace_existing=True,
            )
            scheduled.append(identifier)

        logger.info(
            "Scheduled habit reminders",
            extra={
                "habit_id": str(habit.id),
                "jobs": len(scheduled),
                "at": reminder.time.strftime("%H:%M"),
            },
        )
        return scheduled

    def cancel_for(self, habit: Habit) -> None:
        for weekday in WEEKDAY_INDICES:
            identifier = notification_id(habit, weekday)
            if self.scheduler.get_job(identifier) is not None:
                self.scheduler.remove_job(identifier)
        logger.debug("Cancelled habit reminders", extra={"habit_id": str(habit.id)})

    def remove_all(self) -> None:
        self.scheduler.remove_all_jobs()
        logger.info("Removed all habit reminders")

    def pending_ids(self) -> list[str]:
        return sorted(job.id for job in self.scheduler.get_jobs())

    def _deliver(self, identifier: str, title: str, body: str) -> None:
        try:
            self.notifier(identifier, title, body)
        except Exception:  # noqa: BLE001
            logger.exception("Reminder delivery failed", extra={"notification_id": identifier})
